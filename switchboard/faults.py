"""
Switchboard faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the engine
  can produce. Codes are grouped by domain so logs and searches stay predictable.
- DispatchFault / DispatchWarning: base types that carry a message + options and
  know how to render themselves (rich) in a friendly, lowercased, actionable way.
- Domain families:
  • RegistrationError  → raised while registering commands (setup defects).
  • ParseError         → returned by the tokenizer as a structured value.
  • ResolutionError    → returned by the resolver as a structured value.
  • ConfigurationError → raised when a required sink was never supplied.

Integration
- Input-driven faults (parse/resolution) are never raised by the engine; they are
  handed to the caller's error sink. Use console_fallback() (see dispatch) or any
  callable accepting a fault.
- Rendering honours host hooks in __main__: __prog__, __styles__ and __codes__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - registration (10xxx)
      • DUPLICATE_COMMAND, DUPLICATE_PARAMETER
    - parsing (11xxx)
      • MALFORMED_PARAMETER_NAME, EMPTY_INPUT
    - resolution (12xxx)
      • COMMAND_NOT_FOUND, UNKNOWN_PARAMETER, VALIDATION_FAILED
    - configuration (13xxx)
      • SINK_NOT_CONFIGURED
    - warnings (19xxx)
      • SHADOWED_COMMAND
    """
    # --- registration errors (10xxx) ---
    DUPLICATE_COMMAND           = 10101
    DUPLICATE_PARAMETER         = 10102

    # --- parse errors (11xxx) ---
    MALFORMED_PARAMETER_NAME    = 11101
    EMPTY_INPUT                 = 11102

    # --- resolution errors (12xxx) ---
    COMMAND_NOT_FOUND           = 12101
    UNKNOWN_PARAMETER           = 12102
    VALIDATION_FAILED           = 12103

    # --- configuration errors (13xxx) ---
    SINK_NOT_CONFIGURED         = 13101

    # --- warnings (19xxx) ---
    SHADOWED_COMMAND            = 19101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(self, palette, title):
    """
    shared rich renderer for faults and warnings: header, message and hint.
    """
    main = __import__("__main__")

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = self.options.get("colorful", True)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", "switchboard"), styler("prog-name"))

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(self.code.normalize(), styler("code")),
        " | ",
        text(self.title.title(), styler(title)),
        " ]"
    )
    renders = [header, text(self.message, styler("message"))]
    if self.hint:
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

    if self.options.get("fancy", False):
        return Panel(Group(*renders[1:]), title=header, title_align="left")
    return Group(*renders)


class DispatchFault(Exception):
    """
    base type of every switchboard fault.

    a fault is a plain value first: the engine returns parse and resolution
    faults instead of raising them. registration and configuration faults are
    raised, since they report setup defects rather than bad user input.

    options
    - title, code, hint: presentation metadata (class defaults apply).
    - any context the reporter may want (command, parameter, input, index, ...).
    """
    __title__ = "dispatch fault"
    __code__ = Unset

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(DispatchFault, ValueError):
    __title__ = "invalid registration"


class DuplicateCommandError(RegistrationError):
    __title__ = "duplicate command"
    __code__ = FaultCode.DUPLICATE_COMMAND


class DuplicateParameterError(RegistrationError):
    __title__ = "duplicate parameter"
    __code__ = FaultCode.DUPLICATE_PARAMETER


class ParseError(DispatchFault):
    __title__ = "unreadable input"


class MalformedParameterNameError(ParseError):
    __title__ = "malformed parameter name"
    __code__ = FaultCode.MALFORMED_PARAMETER_NAME


class EmptyInputError(ParseError):
    __title__ = "empty input"
    __code__ = FaultCode.EMPTY_INPUT


class ResolutionError(DispatchFault):
    __title__ = "unresolvable command"


class CommandNotFoundError(ResolutionError):
    __title__ = "command not found"
    __code__ = FaultCode.COMMAND_NOT_FOUND


class UnknownParameterError(ResolutionError):
    __title__ = "unknown parameter"
    __code__ = FaultCode.UNKNOWN_PARAMETER


class ValidationFailedError(ResolutionError):
    __title__ = "invalid value"
    __code__ = FaultCode.VALIDATION_FAILED


class ConfigurationError(DispatchFault, RuntimeError):
    __title__ = "misconfigured dispatcher"


class SinkNotConfiguredError(ConfigurationError):
    __title__ = "sink not configured"
    __code__ = FaultCode.SINK_NOT_CONFIGURED


class DispatchWarning(UserWarning):
    """
    base type of switchboard warnings (emitted through the warnings module).
    """
    __title__ = "dispatch warning"
    __code__ = Unset

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    title = DispatchFault.title
    code = DispatchFault.code
    hint = DispatchFault.hint

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedCommandWarning(DispatchWarning):
    __title__ = "shadowed command"
    __code__ = FaultCode.SHADOWED_COMMAND


__all__ = (
    "FaultCode",
    "DispatchFault",
    "RegistrationError",
    "DuplicateCommandError",
    "DuplicateParameterError",
    "ParseError",
    "MalformedParameterNameError",
    "EmptyInputError",
    "ResolutionError",
    "CommandNotFoundError",
    "UnknownParameterError",
    "ValidationFailedError",
    "ConfigurationError",
    "SinkNotConfiguredError",
    "DispatchWarning",
    "ShadowedCommandWarning",
)
