"""
Cmdbind faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- CommandExit: a group of exceptions collected during one deferred phase.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Name-first messages: every message names the command, token or option at fault.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- Command code builds faults during routing/binding/parsing and calls
  Invocation.trigger(fault, **ctx), which merges the runtime options in.
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the binder (stable identifiers).

    grouping (by high-level domain)
    - routing (111xx)
      • NOT_ENOUGH_ARGUMENTS, UNKNOWN_COMMAND, UNKNOWN_SUBCOMMAND
    - flag syntax (112xx)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, OPTION_VALUE_REQUIRED
    - configuration (113xx)
      • MALFORMED_METADATA, DUPLICATED_OPTION, UNDEFINED_ACTION, IMMUTABLE_RECORD
    - resolution (114xx)
      • MISSING_REQUIRED_OPTION
    - delegated errors (115xx)
      • DELEGATED_ERROR
    - warnings (12xxx)
      • EMPTY_INLINE_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors (111xx) ---
    NOT_ENOUGH_ARGUMENTS        = 11101
    UNKNOWN_COMMAND             = 11102
    UNKNOWN_SUBCOMMAND          = 11103

    # --- flag syntax errors (112xx) ---
    MALFORMED_TOKEN             = 11201
    UNKNOWN_SWITCH              = 11202
    OPTION_VALUE_REQUIRED       = 11203

    # --- configuration errors (113xx) ---
    MALFORMED_METADATA          = 11301
    DUPLICATED_OPTION           = 11302
    UNDEFINED_ACTION            = 11303
    IMMUTABLE_RECORD            = 11304

    # --- resolution errors (114xx) ---
    MISSING_REQUIRED_OPTION     = 11401

    # --- delegated errors (115xx) ---
    DELEGATED_ERROR             = 11501

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_ERROR_STYLES = {
    # header parts
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "title": "bold #FF4DA6",  # friendly pinky title

    # body
    "message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",  # gentle green arrow
    "hint": "italic #9CE19C",  # gentle green hint text
}

_WARNING_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #FFB400",  # amber fault code for warnings
    "title": "bold #FFC2E0",
    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}

_EXIT_STYLES = {
    "prog-name": "bold #E6E6F0",
    "title": "bold #FF4DA6",  # group title (Bad Exit)
}


def _styles(defaults):
    """
    merge the host's __styles__ over a palette; unknown keys style as plain text.
    """
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _renderer(fault, styles):
    """
    build the styler/text helpers shared by every fault renderer.
    """
    colorful = fault.options.get("colorful", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _prog(fault):
    main = __import__("__main__")
    return getattr(main, "__prog__", fault.options.get("prog") or "cmdbind")


def _render(fault, palette, width=None):
    """
    lay out one fault: `[ prog — code | title ]`, the message, then `→ hint`.
    """
    styler, text = _renderer(fault, _styles(palette))
    header = Text.assemble(
        "[ ",
        text(_prog(fault), styler("prog-name")),
        " — ",
        text(fault.options["code"].normalize(), styler("code")),
        " | ",
        text(fault.options["title"].title(), styler("title")),
        " ]",
    )
    body = Group(
        text(fault.message, styler("message")),
        Text.assemble(text(" → ", styler("hint-arrow")), text(fault.options.get("hint"), styler("hint"))),
    )
    if fault.options.get("fancy", False):
        return Panel(body, title=header, title_align="left", width=width)
    return Group(header, body)


class _Fault:
    """
    message + read-only options shared by errors and warnings.

    options carry the presentation settings (prog, shell, fancy, colorful,
    deferred) next to the context of the fault (title, code, hint, docs,
    input, command, option, ...). copy.replace() merges new options in.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandException(_Fault, Exception):
    def __rich__(self):
        try:
            width = int((console.width - 4) * self.options["ratio"])
        except KeyError:
            width = None
        return _render(self, _ERROR_STYLES, width)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.options.get("exception")
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)


# routing
class NotEnoughArgumentsError(CommandException): ...
class UnknownCommandError(CommandException): ...
class UnknownSubcommandError(CommandException): ...

# flag syntax
class MalformedTokenError(CommandException): ...
class UnknownSwitchError(CommandException): ...
class OptionValueRequiredError(CommandException): ...

# configuration
class MalformedMetadataError(CommandException): ...
class DuplicatedOptionError(CommandException): ...
class UndefinedActionError(CommandException): ...
class ImmutableRecordError(CommandException): ...

# resolution
class MissingRequiredOptionError(CommandException): ...

# delegated
class DelegatedCommandError(CommandException): ...


class CommandWarning(_Fault, ABC, Warning):
    def __rich__(self):
        return _render(self, _WARNING_STYLES)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class EmptyOptionValueWarning(CommandWarning): ...


class CommandExit(ExceptionGroup[CommandException]):
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        styler, text = _renderer(self, _styles(_EXIT_STYLES))
        header = Text.assemble("[ ", text(_prog(self), styler("prog-name")), " — ", text(self.message.title(), styler("title")), " ]")

        # nested faults take two thirds of the console so the group frame stays visible
        renders = [copy.replace(exception, ratio=2/3) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})




def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised.

    typical options
    - prog, shell, fancy, colorful, deferred, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., input/command/option).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "NotEnoughArgumentsError",
    "UnknownCommandError",
    "UnknownSubcommandError",
    "MalformedTokenError",
    "UnknownSwitchError",
    "OptionValueRequiredError",
    "MalformedMetadataError",
    "DuplicatedOptionError",
    "UndefinedActionError",
    "ImmutableRecordError",
    "MissingRequiredOptionError",
    "DelegatedCommandError",
    "CommandWarning",
    "EmptyOptionValueWarning",
    "CommandExit",
    "FaultCode",
    "trigger",
    "getdoc",
)
