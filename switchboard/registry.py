"""
Switchboard registry: the ordered collection of declared options.

The registry owns every Option it creates. Declaration order is display and
iteration order; it has no effect on parse priority.

Invariants enforced here
- long names are pairwise distinct; short names are pairwise distinct where present.
- at most one option is positional (claimed through Option.as_positional()).
- at most one option has Kind.HELP.

Lookups raise OptionNotFoundError when nothing matches. The parser treats that
as malformed input; direct callers get it as a configuration error.
"""
import logging

from .faults import *
from .options import Kind, Option
from .utils import *

log = logging.getLogger(__name__)


class Registry:
    def __init__(self):
        self._options = []
        self._longs = {}
        self._shorts = {}
        self._positional = Unset
        self._help = Unset

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return name in self._longs

    def __repr__(self):
        return "registry(%s)" % ", ".join(option.long_name for option in self._options)

    def add(self, kind, long_name, short_name=Unset, description=Unset):
        """
        Declare a new option and return it for chained configuration.

        Raises
        - DuplicateNameError: long_name, or a given short_name, is already taken.
        - DuplicateHelpError: a second Kind.HELP option is declared.
        - InvalidNameError / KindMismatchError: forwarded from Option validation.
        """
        if long_name in self._longs:
            raise DuplicateNameError(f"option long name {long_name!r} is already declared")
        if short_name is not Unset and short_name in self._shorts:
            raise DuplicateNameError(
                f"option short name {short_name!r} is already used by {self._shorts[short_name].long_name!r}"
            )
        if kind is Kind.HELP and self._help is not Unset:
            raise DuplicateHelpError(f"help option is already declared as {self._help.long_name!r}")

        option = Option(kind, long_name, short_name, description, registry=self)

        self._options.append(option)
        self._longs[long_name] = option
        if short_name is not Unset:
            self._shorts[short_name] = option
        if kind is Kind.HELP:
            self._help = option

        log.debug("declared %r", option)
        return option

    def _claim_positional(self, option):
        # Called by Option.as_positional() before it flips its own flag.
        if self._positional is not Unset and self._positional is not option:
            raise DuplicatePositionalError(
                f"option {self._positional.long_name!r} is already positional; cannot also mark {option.long_name!r}"
            )
        self._positional = option

    def find_short(self, name, /):
        try:
            return self._shorts[name]
        except KeyError:
            raise OptionNotFoundError(f"no option with short name {name!r}") from None

    def find_long(self, name, /):
        try:
            return self._longs[name]
        except KeyError:
            raise OptionNotFoundError(f"no option with long name {name!r}") from None

    def find_positional(self):
        if self._positional is Unset:
            raise OptionNotFoundError("no positional option is declared")
        return self._positional

    def find_help(self):
        if self._help is Unset:
            raise OptionNotFoundError("no help option is declared")
        return self._help

    def shorts(self):
        """
        Declared short names, in declaration order.
        """
        return [option.short_name for option in self._options if option.short_name is not None]

    def longs(self):
        return list(self._longs)


__all__ = (
    "Registry",
)
