"""
Switchboard faults: configuration errors, parse faults and their rendering.

Scope
- ConfigurationError family: programming misuse detected at the call site
  (incompatible builder calls, duplicate names, querying an undeclared option).
  These are raised and never collapsed; they point at a defect in the caller's
  declarations, not at bad user input.
- ParseFault family: malformed user input met while walking the tokens
  (unknown switch, dangling '=', non-numeric integer value, unmet minimum).
  The parser raises these internally, catches them at the parse boundary and
  reports a boolean verdict; the faults themselves stay on ArgParser.faults.
- FaultCode: canonical, stable numeric identifiers for every parse fault.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: "unknown flag 'x' at second position".
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical parse fault codes (stable identifiers).

    grouping
    - token shape (1111x)
      • EMPTY_TOKEN, MALFORMED_TOKEN, DANGLING_ASSIGNMENT
    - switches (1112x)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED, UNCASTABLE_VALUE
    - positionals (1113x)
      • UNEXPECTED_POSITIONAL
    - post-parse validation (1114x)
      • NOT_ENOUGH_VALUES, MISSING_VALUE
    - empty input (1119x)
      • EMPTY_PROMPT
    """
    # --- token shape errors ---
    EMPTY_TOKEN                 = 11111
    MALFORMED_TOKEN             = 11112
    DANGLING_ASSIGNMENT         = 11113

    # --- switch errors ---
    UNKNOWN_SWITCH              = 11121
    FLAG_ASSIGNMENT             = 11122
    OPTION_VALUE_REQUIRED       = 11123
    UNCASTABLE_VALUE            = 11124

    # --- positional errors ---
    UNEXPECTED_POSITIONAL       = 11131

    # --- validation errors ---
    NOT_ENOUGH_VALUES           = 11141
    MISSING_VALUE               = 11142

    # --- prompt errors ---
    EMPTY_PROMPT                = 11191

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConfigurationError(Exception):
    """
    base class for declaration-time misuse (fail-fast, never collapsed).
    """


class KindMismatchError(ConfigurationError, TypeError): ...
class DuplicateNameError(ConfigurationError, ValueError): ...
class InvalidNameError(ConfigurationError, ValueError): ...
class InvalidSettingError(ConfigurationError, ValueError): ...
class DuplicatePositionalError(ConfigurationError, ValueError): ...
class DuplicateHelpError(ConfigurationError, ValueError): ...
class OptionNotFoundError(ConfigurationError, LookupError): ...
class UnsetValueError(ConfigurationError, LookupError): ...
class ValueIndexError(ConfigurationError, IndexError): ...


class ParseFault(Exception):
    """
    base class for malformed-input faults.

    carries a message plus read-only options; the parser fills in:
    - code: FaultCode
    - title: short lowercase headline
    - hint: one actionable sentence
    - prog: program name used in the rendered header
    - colorful: whether __rich__ applies styles
    - token / index / input / option: context, when known
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize() if "code" in self.options else "", styler("code")),
            " | ",
            text(self.options.get("title", "").title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        return Group(header, message, hint)


class EmptyPromptError(ParseFault): ...
class EmptyTokenError(ParseFault): ...
class MalformedTokenError(ParseFault): ...
class DanglingAssignmentError(ParseFault): ...
class UnknownSwitchError(ParseFault): ...
class FlagAssignmentError(ParseFault): ...
class OptionValueRequiredError(ParseFault): ...
class UncastableValueError(ParseFault): ...
class UnexpectedPositionalError(ParseFault): ...
class NotEnoughValuesError(ParseFault): ...
class MissingValueError(ParseFault): ...


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ConfigurationError",
    "KindMismatchError",
    "DuplicateNameError",
    "InvalidNameError",
    "InvalidSettingError",
    "DuplicatePositionalError",
    "DuplicateHelpError",
    "OptionNotFoundError",
    "UnsetValueError",
    "ValueIndexError",
    "ParseFault",
    "EmptyPromptError",
    "EmptyTokenError",
    "MalformedTokenError",
    "DanglingAssignmentError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "UncastableValueError",
    "UnexpectedPositionalError",
    "NotEnoughValuesError",
    "MissingValueError",
    "getdoc",
)
