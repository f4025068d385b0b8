"""
Switchboard command layer: command schemas and the registry that owns them.

What this module provides
- Command: binds a Python callable (the action) to a canonical name, aliases,
  an ordered set of Parameter specs and a short description. Calling a Command
  with a mapping of resolved parameters forwards it to the action.
- command(...): create a Command or a decorator that produces one.
- Registry: name → Command mapping, in registration order, with uniqueness
  checks on command names/aliases and on each command's parameter names/aliases.

Core ideas
- Registration happens once, at startup; the registry is read-only afterwards.
- Names are matched case-insensitively; canonical command names are lower-cased
  when registered.
- "help" is reserved: it always means the registry-wide help and shadows any
  user command registered under that name or alias.

Quick start
    from switchboard import Registry, Parameter

    registry = Registry(descr="greeting tools")

    @registry.command(aliases=("g",), parameters=(Parameter("name", "n", ordinal=1),))
    def greet(parameters):
        print("hello, %s" % parameters.get("name", "world"))
"""
import inspect
import logging
import warnings

from .faults import *
from .parameters import Parameter
from .utils import *

logger = logging.getLogger(__name__)

RESERVED = "help"


def _docstring(action, /):
    # builtins and other C callables document themselves, not the command
    if not (inspect.isfunction(action) or inspect.ismethod(action)):
        return Unset
    return inspect.getdoc(action) or Unset


def _process_metadata(cls, metadata, /):
    """
    Internal: normalize and validate command metadata in place.

    Raises
    - TypeError when the action is not callable, names are not strings,
      parameters are not Parameter specs or descr is not a string.
    - ValueError when a name is empty/malformed or descr is empty.
    """
    if not callable(metadata["action"]):
        raise TypeError(f"{cls.__typename__} action must be callable")

    metadata["name"] = sanitize_name(cls, metadata["name"])

    if isinstance(aliases := metadata["aliases"], str):
        aliases = (aliases,)
    metadata["aliases"] = tuple(sanitize_name(cls, alias) for alias in aliases)

    parameters = tuple(metadata["parameters"])
    for parameter in parameters:
        if not isinstance(parameter, Parameter):
            raise TypeError(f"{cls.__typename__} parameters must be parameter specs")
    metadata["parameters"] = parameters

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


class Command(metaclass=SchemaType):
    """
    Command schema: a named, aliasable action with declared parameters.

    Lifecycle
    - Constructed from an action callable (directly or through @command).
    - Registered once in a Registry, which lower-cases its canonical name.
    - Bound by the resolver: the action is borrowed, never copied, and is
      called with a mapping of canonical parameter names to resolved values.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "parameters",
        "descr",
        "action",
    )

    __displayable__ = (
        "name",
        "aliases",
        "parameters",
        "descr",
    )

    def __new__(
            cls,
            action,
            /,
            name=Unset,
            aliases=(),
            parameters=(),
            descr=Unset,
    ):
        """
        Construct a Command.

        Parameters
        - action: Callable[[Mapping[str, object]], object]
          Invoked with the resolved parameters.
        - name: str
          Canonical name; defaults to the action's __name__.
        - aliases: str | Iterable[str]
          Alternative names (e.g. "g" for "greet").
        - parameters: Iterable[Parameter]
          Declared parameters, in order (the order is kept for help output).
        - descr: str
          Short description; defaults to the action's docstring.
        """
        metadata = {
            "action": action,
            "name": coalesce(name, getattr(action, "__name__", Unset)),
            "aliases": aliases,
            "parameters": parameters,
            "descr": coalesce(descr, _docstring(action)),
        }
        _process_metadata(cls, metadata)

        self = super().__new__(cls)
        for field, value in metadata.items():
            setattr(self, "_" + field, value)
        return self

    @property
    def names(self):
        return (self._name, *self._aliases)

    def __call__(self, parameters, /):
        return self._action(parameters)


def command(source=Unset, /, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct: cmd = command(func, name="x", ...)
    - Decorator:
        @command(aliases=("g",))
        def greet(parameters): ...
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


class Registry:
    """
    Registered commands, keyed by canonical (lower-cased) name.

    Contract
    - register() enforces global name/alias uniqueness and per-command
      parameter name/alias uniqueness, case-insensitively; a rejected command
      is never partially added.
    - lookup() matches names first, then aliases, case-insensitively; the
      reserved "help" never resolves to a user command.
    - iteration yields commands in registration order.

    Registration is expected to complete before any dispatch; there is no
    internal locking.
    """

    def __init__(self, descr=Unset):
        if not isinstance(descr, str | Unset):
            raise TypeError("registry 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("registry 'descr' cannot be empty")
        self._descr = coalesce(descr)
        self._commands = {}

    descr = mirror("descr")
    commands = mirror("commands")

    @staticmethod
    def reserved(name, /):
        """
        Tell whether a command token is the reserved help pseudo-command.
        """
        return isinstance(name, str) and name.lower() == RESERVED

    def register(self, command, /):
        """
        Add a command to the registry and return it.

        Raises
        - TypeError: the argument is not a Command.
        - DuplicateCommandError: the name or an alias is already taken.
        - DuplicateParameterError: two parameter names/aliases collide.

        Warns
        - ShadowedCommandWarning: the name or an alias is the reserved "help".
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")

        taken = {name.lower(): owner for owner in self._commands.values() for name in owner.names}
        claimed = set()
        for name in command.names:
            if (key := name.lower()) in taken or key in claimed:
                owner = taken.get(key, command)
                raise DuplicateCommandError(
                    "duplicate command definition %r" % key,
                    hint="%r is already used by command %r" % (key, owner.name),
                    command=command,
                    input=name,
                )
            claimed.add(key)

        pool = set()
        for parameter in command.parameters:
            for name in parameter.names:
                if (key := name.lower()) in pool:
                    raise DuplicateParameterError(
                        "command definition %r has duplicate parameter name %r" % (command.name.lower(), key),
                        hint="give every parameter of %r a distinct name and distinct aliases" % command.name.lower(),
                        command=command,
                        parameter=parameter,
                        input=name,
                    )
                pool.add(key)

        for name in filter(self.reserved, command.names):
            warnings.warn(ShadowedCommandWarning(
                "command %r registers the reserved name %r and cannot be reached through it" % (
                    command.name.lower(), name
                ),
                hint="'help' always shows the registry-wide help; pick another name or alias",
                command=command,
                input=name,
            ), stacklevel=2)

        command._name = command.name.lower()
        self._commands[command.name] = command
        logger.debug("registered command %r (aliases: %s)", command.name, ", ".join(command.aliases) or "none")
        return command

    def lookup(self, name, /):
        """
        Find a command by name or alias, case-insensitively.

        Returns None when nothing matches, and always for the reserved "help".
        """
        if not isinstance(name, str):
            raise TypeError("lookup() argument must be a string")
        if self.reserved(name):
            return None

        key = name.lower()
        try:
            return self._commands[key]
        except KeyError:
            pass
        for command in self._commands.values():
            if key in (alias.lower() for alias in command.aliases):
                return command
        logger.debug("no command matches %r", name)
        return None

    def command(self, source=Unset, /, **kwargs):
        """
        Build a Command (see command()) and register it in one step.

        Works both as @registry.command and @registry.command(...).
        """
        @rename("command")
        def wrapper(source, /):
            return self.register(command(source, **kwargs))

        return wrapper(source) if source is not Unset else wrapper

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(tuple(self._commands.values()))

    def __contains__(self, name):
        return isinstance(name, str) and self.lookup(name) is not None

    def __repr__(self):
        return "registry(descr=%r, commands=%r)" % (self._descr, tuple(self._commands))


__all__ = (
    "Command",
    "command",
    "Registry",
)
