"""
Cmdbind options: the runtime side of a bound record.

Overview
- OptState: where an option's value came from (untouched, flag, environment).
- Opt: one resolved leaf field. It carries the derived name, the description,
  the requiredness, the current string value and a setter that writes back
  into the owning record.
- Flags: read-only, name-keyed mapping of the options of one invocation.
  Iteration follows field-discovery order.

State machine
- UNTOUCHED   → FLAG_PASSED   (Opt.set, called by the flag parser)
- FLAG_PASSED → FLAG_PASSED   (a repeated flag; the last value wins)
- UNTOUCHED   → ENV_PASSED    (Opt.fallback, environment lookup)
Any other transition raises RuntimeError: a flag value is never replaced by
an environment value.
"""
import logging
from collections.abc import Mapping
from enum import IntEnum

from .utils import Unset, envify

logger = logging.getLogger(__name__)


class OptState(IntEnum):
    UNTOUCHED = 0
    FLAG_PASSED = 1
    ENV_PASSED = 2


class Opt:
    """
    Resolved representation of one leaf field.

    Attributes
    - name: str                 derived external name (unique inside a Flags)
    - descr: str | None         free-text description
    - required: bool            whether resolution fails when nothing sets it
    - value: str                current value ("" until set)
    - state: OptState           origin of the current value
    - setter: Callable[[str], None]
                                write-back into the owning record
    """
    __slots__ = ("name", "descr", "required", "value", "state", "setter")

    def __init__(self, name, setter, /, descr=None, required=False):
        if not isinstance(name, str) or not name:
            raise TypeError("opt 'name' must be a non-empty string")
        if not callable(setter):
            raise TypeError("opt 'setter' must be callable")
        self.name = name
        self.descr = descr
        self.required = bool(required)
        self.value = ""
        self.state = OptState.UNTOUCHED
        self.setter = setter

    def set(self, value, /):
        """
        Record a value given on the command line.
        """
        if self.state is OptState.ENV_PASSED:
            raise RuntimeError(f"opt {self.name!r} was already resolved from the environment")
        self.setter(value)
        self.value = value
        self.state = OptState.FLAG_PASSED

    def fallback(self, environ, /):
        """
        Take the value from the environment when nothing was passed as a flag.

        Returns True when the environment provided a value.
        """
        if self.state is not OptState.UNTOUCHED:
            return False
        try:
            value = environ[variable := envify(self.name)]
        except KeyError:
            return False
        logger.debug("opt %r resolved from environment variable %s", self.name, variable)
        self.setter(value)
        self.value = value
        self.state = OptState.ENV_PASSED
        return True

    @property
    def missing(self):
        """
        True when the option is required and nothing resolved it.
        """
        return self.required and self.state is OptState.UNTOUCHED

    def __str__(self):
        return self.value

    def __repr__(self):
        return "opt(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "required", self.required
        yield "value", self.value
        yield "state", self.state


class Flags(Mapping):
    """
    Name-keyed options of one invocation.

    Lookup is by derived name; iteration yields names in registration order.
    The mapping is read-only for consumers, options are added through register().
    """

    def __init__(self, opts=(), /):
        self._opts = {}
        for opt in opts:
            if self.register(opt) is not Unset:
                raise ValueError(f"flags cannot hold two opts named {opt.name!r}")

    def register(self, opt, /):
        """
        Add an option; returns the option already holding the name, or Unset.

        A name that is already taken is left untouched so the caller can decide
        how to report the clash.
        """
        if not isinstance(opt, Opt):
            raise TypeError("flags can only register opts")
        if (existing := self._opts.setdefault(opt.name, opt)) is not opt:
            return existing
        return Unset

    def __getitem__(self, name, /):
        return self._opts[name]

    def __iter__(self):
        return iter(self._opts)

    def __len__(self):
        return len(self._opts)

    def __repr__(self):
        return "flags(%s)" % ", ".join(map(repr, self._opts.values()))

    def __rich_repr__(self):
        yield from self._opts.values()

    def select(self, state, /):
        """
        Return the options currently in the given state, in registration order.
        """
        return [opt for opt in self._opts.values() if opt.state is state]


__all__ = (
    "OptState",
    "Opt",
    "Flags",
)
