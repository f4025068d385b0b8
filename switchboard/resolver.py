"""
Switchboard resolver: RawParse + Registry → Bound or fault.

Order of business
1. a parse fault is handed back untouched.
2. "help" binds the registry-wide help text to the help sink.
3. the command is looked up by name, then alias (case-insensitive).
4. "<command> -help" binds the command's help text to the help sink.
5. every raw parameter, in input order, is matched to a Parameter by name, then
   alias (case-insensitive), then ordinal; its validator runs on the raw value.
   The first failure is returned; nothing is partially bound.

Help requests need a callable help sink (the helper); without one a
SinkNotConfiguredError is raised, since that is a setup defect rather than bad input.
"""
import collections
import difflib
import logging

from .faults import *
from .helpers import render_command_help, render_registry_help
from .utils import *

logger = logging.getLogger(__name__)

Bound = collections.namedtuple("Bound", (
    "action",
    "parameters",
    "help",
), defaults=(False,))
Bound.__doc__ = """
A resolved command, ready to be invoked as bound.action(bound.parameters).

- action: the command's own action (borrowed), or the help delivery action.
- parameters: dict of canonical parameter name → resolved value.
- help: True when the action delivers help text.
"""


def _helping(helper, text, /):
    if not callable(helper):
        raise SinkNotConfiguredError(
            "a help sink has not been configured",
            hint="pass helper=... to the dispatcher, e.g. helper=console_helper",
        )

    @rename("help")
    def action(parameters, /):
        return helper(parameters["text"])

    return Bound(action, {"text": text}, True)


def match(command, key, /):
    """
    Find the parameter of a command addressed by a raw key.

    The key is compared to parameter names first, then to aliases (both
    case-insensitively), then to ordinals. Returns None when nothing matches.
    """
    lowered = key.lower()
    for parameter in command.parameters:
        if parameter.name.lower() == lowered:
            return parameter
    for parameter in command.parameters:
        if lowered in (alias.lower() for alias in parameter.aliases):
            return parameter
    for parameter in command.parameters:
        if parameter.ordinal is not None and str(parameter.ordinal) == key:
            return parameter
    return None


def resolve(raw, registry, /, helper=Unset):
    """
    Resolve a RawParse against a registry.

    Returns
    - Bound on success (including help requests).
    - the ParseError carried by raw, or a ResolutionError
      (CommandNotFoundError, UnknownParameterError, ValidationFailedError).

    Raises
    - SinkNotConfiguredError: help was requested and helper is not callable.
    """
    if raw.fault is not None:
        return raw.fault

    if raw.help and registry.reserved(raw.command):
        return _helping(helper, render_registry_help(registry))

    command = registry.lookup(raw.command)
    if command is None:
        names = [name.lower() for known in registry for name in known.names]
        suggestions = difflib.get_close_matches(raw.command.lower(), names, 5)
        try:
            hint = "did you mean %r? you can also run 'help' to see all commands" % suggestions[0]
        except IndexError:
            hint = "run 'help' to see all available commands"
        return CommandNotFoundError(
            "command %r not found" % raw.command,
            hint=hint,
            input=raw.command,
            suggestions=suggestions,
        )

    if raw.help:
        return _helping(helper, render_command_help(command))

    parameters = {}
    for key, value in raw.parameters.items():
        parameter = match(command, key)
        if parameter is None:
            if key.isdecimal():
                message = "command %r has no parameter defined at position %d" % (command.name, int(key))
                hint = "pass the value by name instead (for example: %s -name %s)" % (command.name, value)
            else:
                message = "command %r has no parameter defined %r" % (command.name, key)
                hint = "run '%s -help' to see its parameters" % command.name
            return UnknownParameterError(message, hint=hint, command=command, input=key, value=value)

        if not parameter.validate(value):
            return ValidationFailedError(
                parameter.message,
                hint="expected a value of type %s for %r" % (parameter.typename, parameter.name),
                command=command,
                parameter=parameter,
                input=key,
                value=value,
            )
        parameters[parameter.name] = value

    logger.debug("resolved %r with parameters %r", command.name, parameters)
    return Bound(command.action, parameters)


__all__ = (
    "Bound",
    "match",
    "resolve",
)
