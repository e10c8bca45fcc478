"""
Switchboard parser: declare options, walk a token sequence, query the results.

What this module provides
- ArgParser: owns a Registry and exposes
  • a builder surface (add_int_option, add_string_option, add_flag, add_help_option),
  • the parse engine (parse), which never raises on malformed input and
    answers with a boolean verdict,
  • a query surface (get_flag, get_int, get_string, wants_help),
  • presentation helpers (help_text, print_help, report).

Token grammar (token 0 is the program name and is skipped)
- ""                → failure
- "value"           → positional mode: this and every remaining token are
                      written, in order, to the positional option; parsing stops.
- "-"               → failure
- "...="            → failure (dangling '=')
- "--name"          → activate flag/help 'name'
- "--name=value"    → assign value to integer/string option 'name'
- "-abc"            → activate flags 'a', 'b', 'c'
- "-abx=5"          → activate flags 'a', 'b', then assign '5' to option 'x'

Help short-circuit
- Activating the help option (long or short, alone or clustered) ends the parse
  right away with success; validity of the other options is not checked.

Verdict
- After the walk, the parse succeeds iff every declared option is valid
  (single-value: has a value or a default; multi-value: count >= minimum).

Known non-transactional behavior
- A failing token does not roll back options written by earlier tokens, and
  multi-value options keep accumulating across repeated parse() calls. Build a
  fresh ArgParser for a clean reparse.

Quick start
    from switchboard import ArgParser

    parser = ArgParser("calc")
    parser.add_int_option("N").with_multivalue(1).as_positional()
    parser.add_flag("sum", "add args")
    parser.add_help_option("h", "help", "accumulate arguments")

    if parser.parse(["calc", "--sum", "1", "2", "3"]):
        print(sum(parser.get_int("N")))
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from . import helper
from .faults import *
from .options import Kind
from .registry import Registry
from .utils import *

log = logging.getLogger(__name__)


def _unpack(names, description):
    """
    Internal: map builder positionals onto (long_name, short_name, description).

    Accepted shapes
    - (long,)
    - (short, long)          when the first name is a single character
    - (long, description)    otherwise
    - (short, long, description)
    A one-character long name with a description must pass description= by keyword.
    """
    match names:
        case (long_name,):
            short_name = Unset
        case (first, second) if isinstance(first, str) and len(first) == 1:
            short_name, long_name = first, second
        case (long_name, text):
            short_name = Unset
            if description is not Unset:
                raise TypeError("description given both positionally and by keyword")
            description = text
        case (short_name, long_name, text):
            if description is not Unset:
                raise TypeError("description given both positionally and by keyword")
            description = text
        case _:
            raise TypeError("expected (long), (short, long), (long, description) or (short, long, description)")
    return long_name, short_name, description


class ArgParser:
    """
    Command-line argument definition and parsing engine.

    Parameters
    - name: program name shown in help and fault headers.
    - colorful: whether help/fault rendering applies styles.
    """

    name = mirror("name")
    colorful = mirror("colorful")
    faults = mirror("faults")

    def __init__(self, name, /, *, colorful=True):
        if not isinstance(name, str):
            raise TypeError("ArgParser() name must be a string")
        self._name = name
        self._colorful = bool(colorful)
        self._registry = Registry()
        self._faults = []

    def __repr__(self):
        return "argparser(name=%r, options=%r)" % (self._name, self._registry.longs())

    def __getitem__(self, long_name):
        return self._registry.find_long(long_name)

    @property
    def registry(self):
        return self._registry

    # --- builder surface ---

    def add_int_option(self, *names, description=Unset):
        return self._registry.add(Kind.INTEGER, *_unpack(names, description))

    def add_string_option(self, *names, description=Unset):
        return self._registry.add(Kind.STRING, *_unpack(names, description))

    def add_flag(self, *names, description=Unset):
        return self._registry.add(Kind.FLAG, *_unpack(names, description))

    def add_help_option(self, short_name, long_name, description=Unset, /):
        return self._registry.add(Kind.HELP, long_name, short_name, description)

    # --- query surface ---

    def _typed(self, long_name, *kinds):
        option = self._registry.find_long(long_name)
        if option.kind not in kinds:
            raise KindMismatchError(
                f"option {long_name!r} is a {option.kind.value} option, not {' or '.join(kind.value for kind in kinds)}"
            )
        return option

    def get_flag(self, long_name, /):
        return self._typed(long_name, Kind.FLAG, Kind.HELP).get_value()

    def get_int(self, long_name, index=Unset, /):
        """
        Integer value; with index, the element of a multi-value option.
        A multi-value option read without index returns the whole list.
        """
        return self._typed(long_name, Kind.INTEGER).get_value(index)

    def get_string(self, long_name, index=Unset, /):
        return self._typed(long_name, Kind.STRING).get_value(index)

    def wants_help(self):
        """
        True iff the help option was activated. Requires a declared help option.
        """
        return self._registry.find_help().get_value()

    # --- presentation ---

    def help_text(self):
        return helper.render(self, colorful=False).plain

    def print_help(self, console=Unset, /):
        console = coalesce(console, Console())
        console.print(helper.render(self, colorful=self._colorful), end="")

    def report(self, console=Unset, /):
        """
        Print the faults of the last parse (if any) to stderr or the given console.
        """
        console = coalesce(console, Console(stderr=True))
        for fault in self._faults:
            console.print(fault)

    # --- parse engine ---

    def _fault(self, cls, message, /, **options):
        return cls(message, prog=self._name, colorful=self._colorful, docs=getdoc(options["code"]), **options)

    def _tokenize(self, prompt):
        if prompt is Unset:
            return list(sys.argv)
        if isinstance(prompt, str):
            try:
                return shlex.split(prompt)
            except ValueError as error:
                raise self._fault(
                    MalformedTokenError,
                    "the command line cannot be split: %s" % str(error).lower(),
                    title="malformed command line",
                    code=FaultCode.MALFORMED_TOKEN,
                    hint="close every quotation mark and escape trailing backslashes",
                ) from None
        if isinstance(prompt, Iterable):
            tokens = list(prompt)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("parse() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def _resolve_long(self, name, index):
        try:
            return self._registry.find_long(name)
        except OptionNotFoundError:
            suggestions = difflib.get_close_matches(name, self._registry.longs(), 5)
            try:
                hint = "did you mean '--%s'? you can also run '%s --help' to see all options" % (suggestions[0], self._name)
            except IndexError:
                hint = "run '%s --help' to see all available options" % self._name
            raise self._fault(
                UnknownSwitchError,
                "unknown option '--%s' at %s position" % (name, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                input="--" + name,
                index=index,
                suggestions=suggestions,
                hint=hint,
            ) from None

    def _resolve_short(self, name, index):
        try:
            return self._registry.find_short(name)
        except OptionNotFoundError:
            raise self._fault(
                UnknownSwitchError,
                "unknown option '-%s' at %s position" % (name, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                input="-" + name,
                index=index,
                suggestions=[],
                hint="run '%s --help' to see all available options" % self._name,
            ) from None

    def _activate(self, option, input, index):
        """
        Set a flag/help option to True. Returns True when help was requested.
        """
        if not option.kind.switch:
            raise self._fault(
                OptionValueRequiredError,
                "option %r at %s position requires a value" % (input, ordinal(index)),
                title="option value required",
                code=FaultCode.OPTION_VALUE_REQUIRED,
                input=input,
                index=index,
                option=option,
                hint="pass the value inline (for example: %s=<value>)" % input,
            )
        option.set_value(True)
        return option.kind is Kind.HELP

    def _assign(self, option, input, text, index):
        if option.kind.switch:
            raise self._fault(
                FlagAssignmentError,
                "flag %r at %s position cannot have a value" % (input, ordinal(index)),
                title="flag cannot take a value",
                code=FaultCode.FLAG_ASSIGNMENT,
                input=input,
                index=index,
                option=option,
                hint="remove everything from '=' (for example: %s)" % input,
            )
        try:
            value = option.kind.coerce(text)
        except ValueError:
            raise self._fault(
                UncastableValueError,
                "value %r for option %r at %s position is not a valid %s" % (
                    text, input, ordinal(index), option.kind.value
                ),
                title="invalid value",
                code=FaultCode.UNCASTABLE_VALUE,
                input=input,
                index=index,
                option=option,
                hint="write a whole number such as 0, 42 or -7",
            ) from None
        option.set_value(value)

    def _parse_long(self, token, eq, index):
        if len(token) < 3 or eq == 2:
            raise self._fault(
                MalformedTokenError,
                "bad form of option %r at %s position" % (token, ordinal(index)),
                title="malformed option",
                code=FaultCode.MALFORMED_TOKEN,
                token=token,
                index=index,
                hint="write long options as --name or --name=value",
            )
        option = self._resolve_long(name := token[2:eq], index)
        if eq == len(token):
            log.debug("token %d: long switch %r", index, name)
            return self._activate(option, "--" + name, index)
        log.debug("token %d: long assignment %r", index, name)
        self._assign(option, "--" + name, token[eq + 1:], index)
        return False

    def _parse_short(self, token, eq, index):
        if eq == len(token):
            cluster, target = token[1:], Unset
        elif eq < 2:
            raise self._fault(
                MalformedTokenError,
                "bad form of option %r at %s position" % (token, ordinal(index)),
                title="malformed option",
                code=FaultCode.MALFORMED_TOKEN,
                token=token,
                index=index,
                hint="put a short option name before '=' (for example: -x=<value>)",
            )
        else:
            cluster, target = token[1:eq - 1], token[eq - 1]

        for name in cluster:
            log.debug("token %d: short switch %r", index, name)
            if self._activate(self._resolve_short(name, index), "-" + name, index):
                return True

        if target is not Unset:
            log.debug("token %d: short assignment %r", index, target)
            self._assign(self._resolve_short(target, index), "-" + target, token[eq + 1:], index)
        return False

    def _slurp(self, tokens, start):
        try:
            option = self._registry.find_positional()
        except OptionNotFoundError:
            raise self._fault(
                UnexpectedPositionalError,
                "unexpected positional argument %r at %s position" % (tokens[start], ordinal(start)),
                title="unexpected positional",
                code=FaultCode.UNEXPECTED_POSITIONAL,
                token=tokens[start],
                index=start,
                hint="remove this value or run '%s --help' to see the expected usage" % self._name,
            ) from None
        log.debug("token %d: positional mode for %r (%d token(s))", start, option.long_name, len(tokens) - start)
        for index in range(start, len(tokens)):
            self._assign(option, option.long_name, tokens[index], index)

    def _walk(self, tokens):
        """
        Walk the tokens once, left to right. Returns True on help short-circuit.
        """
        if not tokens:
            raise self._fault(
                EmptyPromptError,
                "no tokens to parse (the program name is missing)",
                title="empty command line",
                code=FaultCode.EMPTY_PROMPT,
                hint="pass the program name as the first token",
            )

        for index in range(1, len(tokens)):
            token = tokens[index]

            if not token:
                raise self._fault(
                    EmptyTokenError,
                    "empty argument at %s position" % ordinal(index),
                    title="empty argument",
                    code=FaultCode.EMPTY_TOKEN,
                    token=token,
                    index=index,
                    hint="remove the empty argument or quote a real value",
                )

            if not token.startswith("-"):
                self._slurp(tokens, index)
                return False

            if len(token) < 2:
                raise self._fault(
                    MalformedTokenError,
                    "bare '-' at %s position" % ordinal(index),
                    title="malformed option",
                    code=FaultCode.MALFORMED_TOKEN,
                    token=token,
                    index=index,
                    hint="follow '-' with a short option name (for example: -v)",
                )

            if (eq := token.find("=")) == -1:
                eq = len(token)
            elif eq == len(token) - 1:
                raise self._fault(
                    DanglingAssignmentError,
                    "option %r at %s position has '=' but no value" % (token[:-1], ordinal(index)),
                    title="dangling assignment",
                    code=FaultCode.DANGLING_ASSIGNMENT,
                    token=token,
                    index=index,
                    hint="add a value after '=' (for example: %s<value>)" % token,
                )

            if token.startswith("--"):
                requested = self._parse_long(token, eq, index)
            else:
                requested = self._parse_short(token, eq, index)
            if requested:
                log.debug("token %d: help requested, skipping validation", index)
                return True

        return False

    def _validate(self):
        faults = []
        for option in self._registry:
            if option.is_valid():
                continue
            if option.multivalue:
                faults.append(self._fault(
                    NotEnoughValuesError,
                    "option %r needs at least %d value(s) but got %d" % (
                        option.long_name, option.min_args, option.count
                    ),
                    title="not enough values",
                    code=FaultCode.NOT_ENOUGH_VALUES,
                    option=option,
                    hint="add more values or run '%s --help' to see the expected usage" % self._name,
                ))
            else:
                faults.append(self._fault(
                    MissingValueError,
                    "option %r has no value and no default" % option.long_name,
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    option=option,
                    hint="pass it as %s=<value>" % option.names[-1] if not option.positional else
                         "pass a value for <%s>" % option.long_name,
                ))
        return faults

    def parse(self, prompt=Unset, /):
        """
        Parse a command line and report success.

        Parameters
        - prompt:
          • Unset: sys.argv (program name included).
          • str: shell-like string split with shlex.split (program name first).
          • Iterable[str]: explicit tokens (program name first).

        Returns
        - bool: True when every token was understood and every option is valid,
          or when the help option was activated.

        Malformed input never raises; the faults that caused a False verdict are
        available on self.faults. Non-string tokens raise TypeError.
        Writes done before a failing token are kept (no rollback).
        """
        self._faults.clear()
        try:
            tokens = self._tokenize(prompt)
            if self._walk(tokens):
                return True
        except ParseFault as fault:
            log.debug("parse aborted: %s", fault)
            self._faults.append(fault)
            return False

        self._faults.extend(self._validate())
        for fault in self._faults:
            log.debug("validation failed: %s", fault)
        return not self._faults


__all__ = (
    "ArgParser",
)
