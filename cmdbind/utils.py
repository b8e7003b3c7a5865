"""
Cmdbind utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the fields/options/commands layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) through
    immutable views for containers.

- dashify(identifier) / envify(name)
  • Derive the external option name from a field identifier, and the environment
    variable name from an option name.

- parse_bool(text)
  • Parse a textual boolean tag ("true", "F", "1", ...).

- ordinal(number)
  • Human-friendly ordinal labels for position-first messages.

Quick examples
    >>> dashify("MaxRetryCount")
    'max-retry-count'
    >>> dashify("HTTPServer")
    'http-server'
    >>> envify("max-retry-count")
    'MAX_RETRY_COUNT'
    >>> coalesce(Unset, "fallback")
    'fallback'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., isinstance(x, str | Unset)).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance and returns a
    read-only view for container types:
    - Sequence (non-string) → tuple
    - Mapping               → MappingProxyType
    - Set                   → frozenset
    - other types           → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[-_]+")


@functools.cache
def dashify(identifier, /):
    """
    Derive the external option name of a field identifier.

    Rules
    - a separator goes before every capitalised word ("MaxRetry" → "max-retry"),
      which also splits an acronym from the word after it ("HTTPServer" → "http-server");
    - a separator goes between a lowercase letter or digit and an uppercase letter
      ("retry2Count" → "retry2-count");
    - underscores are separators too ("max_retry_count" → "max-retry-count");
    - runs of separators collapse, and none is left at either end;
    - the result is lowercased.

    The function is pure, and applying it to its own output changes nothing.
    """
    if not isinstance(identifier, str):
        raise TypeError("dashify() argument must be a string")
    dashed = _FIRST_CAP.sub(r"\1-\2", identifier)
    dashed = _ALL_CAP.sub(r"\1-\2", dashed)
    return _SEPARATORS.sub("-", dashed).strip("-").lower()


def envify(name, /):
    """
    Return the environment variable consulted for an option name.

        >>> envify("max-retry-count")
        'MAX_RETRY_COUNT'
    """
    if not isinstance(name, str):
        raise TypeError("envify() argument must be a string")
    return name.replace("-", "_").upper()


_TRUTHS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSEHOODS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(text, /):
    """
    Parse a textual boolean.

    Accepted spellings are 1, t, T, TRUE, true, True and 0, f, F, FALSE, false,
    False; real bools pass through. Anything else raises ValueError.
    """
    if isinstance(text, bool):
        return text
    if not isinstance(text, str):
        raise TypeError("parse_bool() argument must be a string or a bool")
    if text in _TRUTHS:
        return True
    if text in _FALSEHOODS:
        return False
    raise ValueError("invalid boolean literal %r" % text)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Public API surface for consumers of cmdbind.utils.
    # Note: Unset and its type are not intended to be used by external users.

    # Functions
    "coalesce",
    "rename",
    "mirror",
    "dashify",
    "envify",
    "parse_bool",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
