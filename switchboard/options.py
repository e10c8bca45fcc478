r"""
Switchboard option model: typed, tagged storage for one declared option.

Overview
- Kind: the four option kinds (flag, integer, string, help). A kind fixes the
  scalar type accepted by set_value()/with_default() and how raw command-line
  text is coerced.
- Option: one declared option. Holds names, description, default, cardinality
  (single or multi-value), positional status, the current value(s), and an
  optional external binding that mirrors every write.

Storage shape
- Single-value options keep one scalar slot that is either Unset or a value of
  the kind's scalar type; later writes overwrite.
- Multi-value options keep a list; writes append.
  The cardinality is fixed by with_multivalue() before parsing starts.

External binding
- bind_external(setter): setter(value) is called synchronously on every write
  of a single-value option.
- bind_external_sequence(seq): seq.append(value) is called on every write of a
  multi-value option.
  Bindings are non-owning: the caller keeps the target alive and must not
  mutate it from another thread during a parse pass.

Builders
- with_default, with_multivalue, as_positional, bind_external and
  bind_external_sequence all return the option itself for chaining, and raise
  a ConfigurationError subclass right away when the call does not fit the kind.

Quick example:
    >>> from switchboard.options import Kind, Option
    >>> count = Option(Kind.INTEGER, "count", "c").with_default(1)
    >>> count.get_value()
    1
    >>> count.set_value(4).get_value()
    4
"""
import logging
import re
from collections.abc import MutableSequence
from enum import Enum

from .faults import *
from .utils import *

log = logging.getLogger(__name__)


class Kind(Enum):
    """
    Option kind. Immutable once an option is created.
    """
    FLAG = "flag"
    INTEGER = "integer"
    STRING = "string"
    HELP = "help"

    @property
    def switch(self):
        """
        True for presence-only kinds (flag, help) that never take a value.
        """
        return self in (Kind.FLAG, Kind.HELP)

    def accepts(self, value, /):
        """
        Whether value has exactly this kind's scalar type (bool is never an int here).
        """
        if self.switch:
            return isinstance(value, bool)
        if self is Kind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, str)

    def coerce(self, text, /):
        r"""
        Convert raw command-line text into this kind's scalar.

        Integers must match r"[+-]?[0-9]+" exactly; anything else raises ValueError.
        Switch kinds take no value and raise KindMismatchError.
        """
        if not isinstance(text, str):
            raise TypeError("coerce() argument must be a string")
        if self.switch:
            raise KindMismatchError(f"{self.value} options do not take a value")
        if self is Kind.INTEGER:
            if not re.fullmatch(r"[+-]?[0-9]+", text):
                raise ValueError(f"invalid integer literal {text!r}")
            return int(text)
        return text


def _sanitize_names(long_name, short_name, /):
    r"""
    Internal: validate the option's identifiers.

    - long_name: required; a word made of letters, digits, '-' and '_' that
      starts with a letter (r"[^\W\d_][\w-]*"). '=' and leading dashes are
      rejected since the tokenizer would never resolve them.
    - short_name: Unset or a single character other than whitespace, '-' and '='.
    """
    if not isinstance(long_name, str):
        raise InvalidNameError("option long name must be a string")
    if not re.fullmatch(r"[^\W\d_][\w-]*", long_name):
        raise InvalidNameError(f"invalid option long name {long_name!r} (write it without leading dashes)")
    if short_name is Unset:
        return
    if not isinstance(short_name, str):
        raise InvalidNameError("option short name must be a string")
    if not re.fullmatch(r"[^\s=-]", short_name):
        raise InvalidNameError(f"invalid option short name {short_name!r} (expected a single character)")


class Option:
    """
    One declared option with its typed storage.

    Options are normally created through a Registry (or the ArgParser builder
    surface) so name uniqueness and the single-positional rule are enforced;
    a standalone Option works too but checks only its own invariants.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes mirroring the private fields.
    """

    __introspectable__ = (
        "kind",
        "short_name",
        "long_name",
        "description",
        "default",
        "positional",
        "multivalue",
        "min_args",
    )

    kind = mirror("kind")
    short_name = mirror("short_name")
    long_name = mirror("long_name")
    description = mirror("description")
    default = mirror("default")
    positional = mirror("positional")
    multivalue = mirror("multivalue")
    min_args = mirror("min_args")

    def __init__(self, kind, long_name, short_name=Unset, description=Unset, *, registry=Unset):
        if not isinstance(kind, Kind):
            raise KindMismatchError("option kind must be a Kind member")
        _sanitize_names(long_name, short_name)
        if not isinstance(description, str | Unset):
            raise InvalidSettingError("option description must be a string")

        self._kind = kind
        self._long_name = long_name
        self._short_name = coalesce(short_name)
        self._description = coalesce(description, "")
        # Flags and the help option read as False until activated.
        self._default = False if kind.switch else Unset
        self._positional = False
        self._multivalue = False
        self._min_args = 0
        self._storage = Unset
        self._binding = Unset
        self._registry = registry

    def __repr__(self):
        return "%s(%s)" % (self._kind.value, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    @property
    def names(self):
        """
        Display spellings, short first: ("-c", "--count") or ("--count",).
        """
        if self._short_name is None:
            return ("--" + self._long_name,)
        return ("-" + self._short_name, "--" + self._long_name)

    @property
    def count(self):
        """
        Number of values written so far (0 or 1 for single-value options).
        """
        if self._multivalue:
            return len(self._storage)
        return int(self._storage is not Unset)

    def has_default(self):
        return self._default is not Unset

    def with_default(self, value, /):
        """
        Declare the value reported when nothing was written.
        The help option always reads False until activated.
        """
        if self._kind is Kind.HELP:
            raise KindMismatchError(f"help option {self._long_name!r} cannot have a default")
        if not self._kind.accepts(value):
            raise KindMismatchError(
                f"{self._kind.value} option {self._long_name!r} cannot default to {type(value).__name__} {value!r}"
            )
        self._default = value
        return self

    def with_multivalue(self, min_args=0, /):
        """
        Turn the option into an accumulating list that needs at least min_args values.
        """
        if self._kind not in (Kind.INTEGER, Kind.STRING):
            raise KindMismatchError(f"{self._kind.value} option {self._long_name!r} cannot be multi-value")
        if not isinstance(min_args, int) or isinstance(min_args, bool):
            raise KindMismatchError("multi-value minimum must be an integer")
        if min_args < 0:
            raise InvalidSettingError("multi-value minimum cannot be negative")
        if not self._multivalue:
            if self._storage is not Unset:
                raise InvalidSettingError(f"option {self._long_name!r} already holds a single value")
            if self._binding is not Unset:
                raise KindMismatchError(
                    f"option {self._long_name!r} is bound to a single value; declare multi-value before binding"
                )
            self._storage = []
        self._multivalue = True
        self._min_args = min_args
        return self

    def as_positional(self):
        """
        Route bare (non-dash) tokens to this option. At most one per registry.
        """
        if self._kind not in (Kind.INTEGER, Kind.STRING):
            raise KindMismatchError(f"{self._kind.value} option {self._long_name!r} cannot be positional")
        if self._positional:
            return self
        if self._registry is not Unset:
            self._registry._claim_positional(self)
        self._positional = True
        return self

    def bind_external(self, setter, /):
        """
        Mirror every write of a single-value option into setter(value).
        """
        if not callable(setter):
            raise KindMismatchError("bind_external() argument must be callable")
        if self._multivalue:
            raise KindMismatchError(
                f"multi-value option {self._long_name!r} must be bound with bind_external_sequence()"
            )
        self._binding = setter
        return self

    def bind_external_sequence(self, sequence, /):
        """
        Mirror every write of a multi-value option into sequence.append(value).
        """
        if self._kind not in (Kind.INTEGER, Kind.STRING):
            raise KindMismatchError(f"{self._kind.value} option {self._long_name!r} cannot bind a sequence")
        if not isinstance(sequence, MutableSequence):
            raise KindMismatchError("bind_external_sequence() argument must be a mutable sequence")
        if not self._multivalue:
            raise KindMismatchError(
                f"option {self._long_name!r} is single-value; call with_multivalue() before binding a sequence"
            )
        self._binding = sequence
        return self

    def set_value(self, value, /):
        """
        Write one value: overwrite (single) or append (multi), then mirror it.
        """
        if not self._kind.accepts(value):
            raise KindMismatchError(
                f"{self._kind.value} option {self._long_name!r} cannot hold {type(value).__name__} {value!r}"
            )
        if self._multivalue:
            self._storage.append(value)
            if self._binding is not Unset:
                self._binding.append(value)
        else:
            self._storage = value
            if self._binding is not Unset:
                self._binding(value)
        log.debug("option %r <- %r", self._long_name, value)
        return self

    def get_value(self, index=Unset, /):
        """
        Read the current value.

        - single-value: the written value, else the default; UnsetValueError if neither.
        - multi-value without index: a copy of the accumulated list.
        - multi-value with index: that element; ValueIndexError when out of range.
        """
        if not self._multivalue:
            if index is not Unset:
                raise KindMismatchError(f"option {self._long_name!r} is single-value and cannot be indexed")
            if self._storage is not Unset:
                return self._storage
            if self._default is not Unset:
                return self._default
            raise UnsetValueError(f"option {self._long_name!r} has no value and no default")

        if index is Unset:
            return list(self._storage)
        if not isinstance(index, int) or isinstance(index, bool):
            raise KindMismatchError("value index must be an integer")
        if not 0 <= index < len(self._storage):
            raise ValueIndexError(
                f"index {index} is out of range for option {self._long_name!r} holding {len(self._storage)} value(s)"
            )
        return self._storage[index]

    def is_valid(self):
        if self._multivalue:
            return len(self._storage) >= self._min_args
        return self._storage is not Unset or self._default is not Unset


__all__ = (
    "Kind",
    "Option",
)
