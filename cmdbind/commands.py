"""
Cmdbind command layer: declare, route, bind and run CLI commands.

What this module provides
- Command: a node of a command tree. It carries a name, an optional options
  record (a dataclass instance or type), ordered children and an action.
  • Router nodes (with children) narrow the target down via positional arguments.
  • Leaf nodes bind their record to options, resolve them and run the action.
- Invocation: the per-run state (route, program name, leftover arguments,
  bound record and options). Actions receive it when they declare a parameter.
- Factories and helpers:
  • command(...): wrap a function into a Command (decorator-friendly).
  • invoke(obj, prompt): convenience runner for Commands or plain callables.

Resolution pipeline (per invocation)
1. route: follow positional arguments from the root to a childless node.
2. bind: flatten the record into options named after their fields.
3. parse: consume `--name value` / `--name=value` flags; stop at the first
   positional or at `--`; the rest is left to the action.
4. fallback: fill untouched options from environment variables.
5. validate: every required option must have been resolved.
6. run: call the action and hand back its result.

Quick start
    from dataclasses import dataclass
    from cmdbind import Command, option, invoke

    @dataclass
    class HttpOptions:
        Port: str = option("port to listen on", required="true")

    def http(invocation):
        print("listening on", invocation.opts.Port)

    root = Command("app", children=[
        Command("serve", children=[Command("http", HttpOptions, action=http)]),
    ])

    if __name__ == "__main__":
        invoke(root, "serve http --port 8080")

Design notes
- The tree is read-only while running; everything an invocation produces lives
  on its Invocation. A record given as a dataclass type is instantiated per run.
- Faults are raised by default; shell/deferred/fancy/colorful change how they
  are surfaced (see cmdbind.faults). Unset runtime flags inherit along the route.
"""
import copy
import dataclasses
import difflib
import functools
import inspect
import logging
import operator
import os
import re
import shlex
import sys
from collections.abc import Iterable, Mapping
from inspect import Parameter

from .faults import *
from .fields import discover, isrecord
from .options import Opt, OptState, Flags
from .utils import *

logger = logging.getLogger(__name__)

_SWITCH = re.compile(r"--?(?P<name>[^\W_]+(-[^\W_]+)*)(=(?P<value>.*))?", re.DOTALL)
_NAME = re.compile(r"(?!-)\S+")
_SETTINGS = ("shell", "fancy", "colorful", "deferred", "environ")


class CommandType(type):
    """
    Metaclass that turns Command classes into introspectable, read-only shapes.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all names
      listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_name(cls, metadata):
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    if not _NAME.fullmatch(name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word that does not start with '-'")


def _process_opts(cls, metadata):
    """
    Validate the options record.

    Accepted shapes
    - None: the command has no options.
    - a dataclass type: instantiated (without arguments) on every invocation.
    - a record instance (dataclass or __describe__ implementer): bound in place,
      so resolved values land in the caller's object.
    """
    opts = metadata["opts"]
    if opts is None or isrecord(opts):
        return
    if isinstance(opts, type) and (dataclasses.is_dataclass(opts) or callable(getattr(opts, "__describe__", None))):
        return
    raise TypeError(f"{cls.__typename__} 'opts' must be a dataclass (type or instance) or implement __describe__()")


def _process_action(cls, metadata):
    """
    Validate the action and work out how it is called.

    An action either takes no argument or exactly one (the Invocation).
    """
    metadata["contextual"] = False
    if (action := metadata["action"]) is None:
        return
    if not callable(action):
        raise TypeError(f"{cls.__typename__} 'action' must be callable")
    try:
        parameters = list(inspect.signature(action).parameters.values())
    except (TypeError, ValueError):
        return
    positionals = [
        parameter for parameter in parameters
        if parameter.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required = [
        parameter for parameter in parameters
        if parameter.default is Parameter.empty and parameter.kind not in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)
    ]
    if len(required) > 1 or (required and required[0].kind is Parameter.KEYWORD_ONLY):
        raise TypeError(f"{cls.__typename__} 'action' must accept no argument or a single invocation")
    metadata["contextual"] = bool(required) or len(positionals) == 1


def _process_settings(cls, metadata):
    for name in ("shell", "fancy", "colorful", "deferred", "fallthrough"):
        if not isinstance(metadata[name], bool | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a bool")
    if not isinstance(metadata["environ"], Mapping | Unset):
        raise TypeError(f"{cls.__typename__} 'environ' must be a mapping")


def _isfrozen(record):
    return dataclasses.is_dataclass(record) and record.__dataclass_params__.frozen


def _attach(self, child):
    """
    Register a child under this command, enforcing unique sibling names.
    """
    if not isinstance(child, Command):
        raise TypeError(f"{type(self).__typename__} children must be commands")
    if self._children.setdefault(child.name, child) is child:
        return child
    raise ValueError(f"{type(self).__typename__} {self.name!r} already has a subcommand named {child.name!r}")


class Invocation:
    """
    State of one run of a command tree.

    Attributes
    - route: tuple[Command, ...]   commands walked from the root to the target
    - command: Command             the target (last element of the route)
    - executed_as: str             program name the process was started as
    - args: list[str]              leftover positional arguments
    - opts: object | None          the bound options record
    - flags: Flags                 the resolved options, by name

    Runtime settings (shell, fancy, colorful, deferred, environ) start from the
    root's values and are overridden by every command entered that sets them.
    """

    def __init__(self, root, /, executed_as=Unset):
        self.route = ()
        self.executed_as = coalesce(executed_as, sys.argv[0] if sys.argv else root.name)
        self.args = []
        self.opts = None
        self.flags = Flags()
        self.shell = False
        self.fancy = False
        self.colorful = False
        self.deferred = False
        self.environ = os.environ
        self._faults = []
        self.enter(root)

    @property
    def command(self):
        return self.route[-1]

    @property
    def prog(self):
        return self.route[0].name

    @property
    def path(self):
        """
        Space-separated route, as typed on the command line.
        """
        return " ".join(command.name for command in self.route)

    def enter(self, command, /):
        self.route += (command,)
        for name in _SETTINGS:
            if (value := getattr(command, name)) is not Unset:
                setattr(self, name, value)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this invocation's runtime settings merged in.

        In deferred mode the fault is kept until finalize(); otherwise it is
        triggered right away (raised, or printed in shell mode).
        """
        fault = copy.replace(
            fault,
            **options,
            prog=self.prog,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            deferred=self.deferred,
        )
        if self.deferred:
            return self._faults.append(fault)
        trigger(fault)

    def finalize(self):
        """
        Flush deferred faults: emit warnings, then exit with every error at once.
        """
        exceptions = []
        warnings = []
        for fault in self._faults:
            if isinstance(fault, CommandException):
                exceptions.append(fault)
            elif isinstance(fault, CommandWarning):
                warnings.append(fault)
            else:
                raise RuntimeError("unexpected fault")
        self._faults.clear()

        for warning in warnings:
            trigger(warning)

        if not exceptions:
            return

        trigger(
            CommandExit(exceptions),
            prog=self.prog,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            deferred=self.deferred,
        )

    def __repr__(self):
        return "invocation(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "route", self.path
        yield "executed_as", self.executed_as
        yield "args", self.args
        yield "opts", self.opts
        yield "flags", self.flags


class Command(metaclass=CommandType):
    """
    Node of a command tree.

    Responsibilities
    - Composition: holds ordered, uniquely named children (router nodes).
    - Binding: turns its options record into named options on every run.
    - Execution: routes, resolves and runs through execute()/invoke().

    Lifecycle
    - Constructed from a name, an options record, children and an action.
    - Children can be added later with add() or the command() decorator method.
    - Each execute() builds a fresh Invocation; the node itself is never
      modified while running.
    """

    __introspectable__ = (
        "name",
        "descr",
        "opts",
        "children",
        "action",
        "fallthrough",
        "shell",
        "fancy",
        "colorful",
        "deferred",
        "environ",
    )

    __displayable__ = (
        "name",
        "descr",
        "opts",
        "children",
        "fallthrough",
    )

    def __new__(
            cls,
            name,
            /,
            opts=None,
            children=(),
            action=None,
            descr=Unset,
            *,
            fallthrough=False,
            shell=Unset,
            fancy=Unset,
            colorful=Unset,
            deferred=Unset,
            environ=Unset
    ):
        """
        Construct a command.

        Parameters
        - name: str
          Routing name, unique among siblings; cannot start with '-'.
        - opts: None | dataclass type | record instance
          Options record. A type is instantiated on every invocation; an
          instance is written in place.
        - children: Iterable[Command]
          Subcommands, in declaration order.
        - action: Callable | None
          Run when this command is the routing target. Takes no argument, or a
          single Invocation.
        - descr: Unset | str | None
          Short description; defaults to the action's docstring.
        - fallthrough: bool (keyword-only)
          When this command has children and an action, run the action instead
          of failing when no subcommand follows (no argument left, or a flag).
        - shell, fancy, colorful, deferred: bool | Unset (keyword-only)
          Fault presentation settings; Unset inherits along the route.
        - environ: Mapping | Unset (keyword-only)
          Environment consulted for option fallbacks; Unset inherits, and the
          root falls back to os.environ.

        Raises
        - TypeError/ValueError on invalid metadata or duplicate child names.
        """
        metadata = {
            "name": name,
            "opts": opts,
            "action": action,
            "descr": coalesce(descr, inspect.getdoc(action) if action is not None else None),
            "fallthrough": fallthrough,
            "shell": shell,
            "fancy": fancy,
            "colorful": colorful,
            "deferred": deferred,
            "environ": environ,
        }
        _process_name(cls, metadata)
        _process_opts(cls, metadata)
        _process_action(cls, metadata)
        _process_settings(cls, metadata)

        self = super().__new__(cls)
        self._children = {}
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        if isinstance(children, Command) or not isinstance(children, Iterable):
            raise TypeError(f"{cls.__typename__} 'children' must be an iterable of commands")
        for child in children:
            _attach(self, child)
        return self

    def add(self, child, /):
        """
        Attach a subcommand and return it.
        """
        return _attach(self, child)

    def subcommand(self, name, /):
        """
        Return the child named exactly `name`, or None.
        """
        return self._children.get(name)

    def command(self, source=Unset, /, **kwargs):
        """
        Create a subcommand from a callable and attach it here.

        Supports the same modes as the module-level command(...):
        - direct: parent.command(func, name="x", opts=Options)
        - decorator: @parent.command(opts=Options)
        """
        @rename("command")
        def wrapper(source, /):
            return self.add(command(source, **kwargs))

        return wrapper(source) if source is not Unset else wrapper

    def _bind(self, invocation):
        """
        Flatten the options record into named options.

        Every leaf field becomes an Opt named dashify(identifier), bound to the
        field's setter. Records that cannot be walked, frozen records, fields
        without a usable name, malformed "required" tags and clashing names are
        configuration faults.
        """
        record = self.opts
        if isinstance(record, type):
            record = record()
        flags = Flags()
        invocation.opts = record
        invocation.flags = flags
        if record is None:
            return flags

        try:
            fields = discover(record)
        except TypeError as exception:
            invocation.trigger(MalformedMetadataError(
                "options record of %r cannot be walked: %s" % (invocation.path, exception),
                title="malformed options record",
                code=FaultCode.MALFORMED_METADATA,
                input=type(record).__name__,
                command=self.name,
                hint="nest records as a tree and make __describe__() yield Field descriptors",
                docs=getdoc(FaultCode.MALFORMED_METADATA),
            ))
            return flags

        frozen = set()
        for field in fields:
            if _isfrozen(field.owner) and id(field.owner) not in frozen:
                frozen.add(id(field.owner))
                invocation.trigger(ImmutableRecordError(
                    "record %r of %r is frozen, its options cannot be written" % (type(field.owner).__name__, invocation.path),
                    title="immutable options record",
                    code=FaultCode.IMMUTABLE_RECORD,
                    input=type(field.owner).__name__,
                    command=self.name,
                    hint="declare %r with @dataclass instead of @dataclass(frozen=True)" % type(field.owner).__name__,
                    docs=getdoc(FaultCode.IMMUTABLE_RECORD),
                ))
            if id(field.owner) in frozen:
                continue

            if not (name := dashify(field.identifier)):
                invocation.trigger(MalformedMetadataError(
                    "field %r of %r does not yield an option name" % (field.identifier, invocation.path),
                    title="unnamed option",
                    code=FaultCode.MALFORMED_METADATA,
                    input=field.identifier,
                    command=self.name,
                    hint="give the field at least one letter or digit",
                    docs=getdoc(FaultCode.MALFORMED_METADATA),
                ))
                continue

            try:
                required = parse_bool(coalesce(field.required, False))
            except (TypeError, ValueError):
                invocation.trigger(MalformedMetadataError(
                    "field %r of %r has a malformed required tag %r" % (field.identifier, invocation.path, field.required),
                    title="malformed required tag",
                    code=FaultCode.MALFORMED_METADATA,
                    input=field.identifier,
                    command=self.name,
                    hint="use one of true/false, t/f, 1/0 (any case) or a bool",
                    docs=getdoc(FaultCode.MALFORMED_METADATA),
                ))
                continue

            opt = Opt(name, field.set, descr=field.descr, required=required)
            if flags.register(opt) is not Unset:
                invocation.trigger(DuplicatedOptionError(
                    "field %r of %r maps to option %r, which is already taken" % (field.identifier, invocation.path, name),
                    title="duplicated option",
                    code=FaultCode.DUPLICATED_OPTION,
                    input=field.identifier,
                    option=name,
                    command=self.name,
                    hint="rename one of the fields so their option names differ",
                    docs=getdoc(FaultCode.DUPLICATED_OPTION),
                ))
                continue

        logger.debug("%s: bound options %s", invocation.path, list(flags))
        return flags

    def _parseflags(self, invocation, flags, tokens, offset=0):
        """
        Consume flags from the front of tokens and return the leftovers.

        grammar
        - '-name value', '--name value', '-name=value', '--name=value'
        - parsing stops at the first token that is not a flag (or a lone '-');
          '--' stops it too and is dropped.
        - a repeated flag overwrites the earlier value.

        faults
        - malformed switch spelling → MalformedTokenError
        - name not bound on this command → UnknownSwitchError (with suggestions)
        - value missing at the end of input → OptionValueRequiredError
        - empty inline value ('--name=') → EmptyOptionValueWarning
        """
        index = 0
        while index < len(tokens):
            token = tokens[index]
            position = ordinal(offset + index + 1)

            if token == "--":
                index += 1
                break
            if token == "-" or not token.startswith("-"):
                break

            index += 1
            if not (match := _SWITCH.fullmatch(token)):
                invocation.trigger(MalformedTokenError(
                    "bad form of option %r at %s position" % (token, position),
                    title="malformed option",
                    code=FaultCode.MALFORMED_TOKEN,
                    input=token,
                    command=self.name,
                    hint="spell options as --name value or --name=value",
                    docs=getdoc(FaultCode.MALFORMED_TOKEN),
                ))
                continue

            name = match["name"]
            value = match["value"]  # None without '=', '' for a bare '='

            try:
                opt = flags[name]
            except KeyError:
                suggestions = difflib.get_close_matches(name, flags.keys(), 5)
                if suggestions:
                    hint = "did you mean '--%s'?" % suggestions[0]
                elif flags:
                    hint = "'%s' accepts %s" % (invocation.path, ", ".join("--" + name for name in flags))
                else:
                    hint = "'%s' does not take any option" % invocation.path
                invocation.trigger(UnknownSwitchError(
                    "unknown option %r at %s position" % (token.partition("=")[0], position),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_SWITCH,
                    input=name,
                    command=self.name,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(FaultCode.UNKNOWN_SWITCH),
                ))
                continue

            if value is None:
                if index >= len(tokens):
                    invocation.trigger(OptionValueRequiredError(
                        "option %r at %s position needs a value" % (name, position),
                        title="missing option value",
                        code=FaultCode.OPTION_VALUE_REQUIRED,
                        input=name,
                        command=self.name,
                        hint="pass it as --%s <value> or --%s=<value>" % (name, name),
                        docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
                    ))
                    continue
                value = tokens[index]
                index += 1
            elif not value:
                invocation.trigger(EmptyOptionValueWarning(
                    "empty inline value for option %r at %s position" % (name, position),
                    title="empty inline value",
                    code=FaultCode.EMPTY_INLINE_VALUE,
                    input=name,
                    command=self.name,
                    hint="add a value after '=' (for example: --%s=<value>)" % name,
                    docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                ))

            opt.set(value)

        args = list(tokens[index:])
        logger.debug("%s: remaining args: %s", invocation.path, args)
        return args

    def _resolve(self, invocation, flags):
        """
        Apply environment fallbacks, then enforce required options.

        Values already written by flags or the environment stay written even
        when a required option turns out to be missing.
        """
        for opt in flags.select(OptState.UNTOUCHED):
            opt.fallback(invocation.environ)

        for opt in flags.values():
            if not opt.missing:
                continue
            invocation.trigger(MissingRequiredOptionError(
                "option %r of %r is required but not passed" % (opt.name, invocation.path),
                title="missing required option",
                code=FaultCode.MISSING_REQUIRED_OPTION,
                input=opt.name,
                option=opt.name,
                command=self.name,
                hint="pass --%s <value> or set %s in the environment" % (opt.name, envify(opt.name)),
                docs=getdoc(FaultCode.MISSING_REQUIRED_OPTION),
            ))

    def init(self, args=(), /, invocation=Unset):
        """
        Bind, parse and resolve this command's options against args.

        No routing happens and the action is not run; the returned Invocation
        holds the bound record, the options and the leftover arguments.
        """
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError("init() argument must be an iterable of strings")
        tokens = list(args)
        if invocation is Unset:
            invocation = Invocation(self)

        flags = self._bind(invocation)
        invocation.finalize()
        invocation.args = self._parseflags(invocation, flags, tokens, len(invocation.route) - 1)
        invocation.finalize()
        self._resolve(invocation, flags)
        invocation.finalize()
        return invocation

    def _run(self, invocation):
        if self.action is None:
            invocation.trigger(UndefinedActionError(
                "command %r has nothing to run" % invocation.path,
                title="undefined action",
                code=FaultCode.UNDEFINED_ACTION,
                command=self.name,
                hint="give %r an action or a subcommand" % self.name,
                docs=getdoc(FaultCode.UNDEFINED_ACTION),
            ))
            return invocation.finalize()

        try:
            if self._contextual:
                return self.action(invocation)
            return self.action()
        except CommandException:
            raise
        except Exception as exception:
            invocation.trigger(DelegatedCommandError(
                "something occurred while running %r: %s" % (invocation.path, exception),
                title="delegated error",
                code=FaultCode.DELEGATED_ERROR,
                command=self.name,
                hint="check additional logs for more details",
                docs=getdoc(FaultCode.DELEGATED_ERROR),
                exception=exception,
            ))
            return invocation.finalize()

    def execute(self, prompt=Unset, /):
        """
        Route prompt through the tree, resolve the target's options and run it.

        Parameters
        - prompt:
          • Unset: use sys.argv (the first item is the program name).
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized arguments (program name excluded).

        Returns
        - whatever the target's action returns.

        Raises
        - CommandException subclasses (or CommandExit in deferred mode) for
          routing, configuration, flag and resolution faults; nothing is raised
          in shell mode, where faults are printed and the process exits.
        """
        executed_as = Unset
        if prompt is Unset:
            executed_as, *tokens = sys.argv or [self.name]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("execute() argument must be a string or an iterable of strings")
        else:
            raise TypeError("execute() argument must be a string or an iterable of strings")

        invocation = Invocation(self, executed_as)
        target = self
        index = 0
        while target.children:
            if target.fallthrough and target.action is not None and (index >= len(tokens) or tokens[index].startswith("-")):
                logger.debug("%s: falling through to its own action", invocation.path)
                break

            if index >= len(tokens):
                choices = ", ".join(target.children)
                invocation.trigger(NotEnoughArgumentsError(
                    "%r needs a subcommand but not enough arguments were given" % invocation.path,
                    title="not enough arguments",
                    code=FaultCode.NOT_ENOUGH_ARGUMENTS,
                    command=target.name,
                    choices=tuple(target.children),
                    hint="add one of: %s" % choices,
                    docs=getdoc(FaultCode.NOT_ENOUGH_ARGUMENTS),
                ))
                return invocation.finalize()

            token = tokens[index]
            index += 1
            if (child := target.subcommand(token)) is None:
                suggestions = difflib.get_close_matches(token, target.children.keys(), 5)
                try:
                    hint = "did you mean %r?" % suggestions[0]
                except IndexError:
                    hint = "choose one of: %s" % ", ".join(target.children)

                # the root routes commands, every node below it routes subcommands
                nested = len(invocation.route) > 1
                exception = UnknownSubcommandError if nested else UnknownCommandError
                code = FaultCode.UNKNOWN_SUBCOMMAND if nested else FaultCode.UNKNOWN_COMMAND
                type = "subcommand" if nested else "command"

                invocation.trigger(exception(
                    "%r is not a valid %s of %r (%s position)" % (token, type, target.name, ordinal(index)),
                    title="unknown %s" % type,
                    code=code,
                    input=token,
                    command=target.name,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(code),
                ))
                return invocation.finalize()

            target = child
            invocation.enter(child)
            logger.debug("routed to %s", invocation.path)

        target.init(tokens[index:], invocation)
        return target._run(invocation)

    def __invoke__(self, prompt=Unset):
        return self.execute(prompt)


def command(source=Unset, /, name=Unset, **kwargs):
    """
    Create a Command from a callable, or return a decorator that does.

    Modes
    - direct:    cmd = command(func, opts=Options)
    - decorator: @command(opts=Options)
                 def serve(invocation): ...

    The command is named after the function (dashified, so `serve_http`
    becomes `serve-http`) unless `name` is given. Remaining keyword arguments
    go to Command (opts, children, descr, fallthrough, runtime settings).
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(coalesce(name, dashify(getattr(source, "__name__", ""))), action=source, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for commands or callables.

    - objects implementing __invoke__ are invoked with prompt;
    - plain callables are wrapped with command() first.

    Returns whatever the executed action returns.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    if callable(object):
        return invoke(command(object), prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    # Public API surface for consumers of cmdbind.commands.
    # These names are re-exported from the package __init__.
    "Command",
    "Invocation",
    "command",
    "invoke",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del CommandType
