"""
Switchboard tokenizer: raw input → command name + raw parameters.

Grammar (left to right, no quoting or escaping)
- token 0 is the command name; "help" (any case) is the registry-wide help request.
- token 1 equal to "help" once its leading dashes are stripped ("-help", "--help")
  asks for the help of the command named by token 0.
- "-name" (or "--name") opens a named capture: the next token is its value unless
  it starts with '-' or the input ends, in which case the value is "" (a flag).
- any other token is positional and is keyed by 1 + the number of raw parameters
  recorded so far ("1", "2", ...).

Faults
- an empty token sequence → EmptyInputError.
- a parameter token made of dashes/whitespace only → MalformedParameterNameError.
Faults are returned inside the RawParse, never raised.
"""
import collections

from .faults import EmptyInputError, MalformedParameterNameError

RawParse = collections.namedtuple("RawParse", (
    "command",
    "parameters",
    "help",
    "fault",
), defaults=(False, None))
RawParse.__doc__ = """
Transient tokenizer output.

- command: the command token as typed (or "help").
- parameters: dict of raw key → raw value, in input order.
- help: True for "help" and "<command> -help".
- fault: a ParseError when the input could not be read, else None.
"""


def split(line, /):
    """
    Split a console line on the space character only.

    Empty fragments (from repeated spaces) are dropped; no quoting is supported.
    """
    if not isinstance(line, str):
        raise TypeError("split() argument must be a string")
    return [token for token in line.split(" ") if token]


def tokenize(tokens, /):
    """
    Turn a token sequence into a RawParse.

    Examples
    - ["cmd"]                  → RawParse("cmd", {})
    - ["cmd", "-x", "5"]       → RawParse("cmd", {"x": "5"})
    - ["cmd", "-flag", "-y", "3"] → RawParse("cmd", {"flag": "", "y": "3"})
    - ["cmd", "val1", "val2"]  → RawParse("cmd", {"1": "val1", "2": "val2"})
    - ["cmd", "--help"]        → RawParse("cmd", {}, help=True)
    """
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("tokenize() argument must be an iterable of strings")

    if not tokens:
        return RawParse("", {}, fault=EmptyInputError(
            "failed to read command",
            hint="enter a command name, or 'help' to list the available commands",
        ))

    command = tokens[0]
    if command.lower() == "help":
        return RawParse("help", {}, help=True)

    if len(tokens) > 1 and tokens[1].lstrip("-").lower() == "help":
        return RawParse(command, {}, help=True)

    parameters = {}
    capture = None

    for index, token in enumerate(tokens[1:], start=1):
        if capture is not None and not token.startswith("-"):
            parameters[capture] = token
            capture = None
            continue
        if capture is not None:
            parameters[capture] = ""
            capture = None

        if token.startswith("-"):
            if not (name := token.lstrip("-")).strip():
                return RawParse(command, parameters, fault=MalformedParameterNameError(
                    "unable to read parameter name %r at position %d" % (token, index),
                    hint="write named parameters as -name or --name (for example: %s -name value)" % command,
                    input=token,
                    index=index,
                ))
            capture = name
        else:
            parameters[str(len(parameters) + 1)] = token

    if capture is not None:
        parameters[capture] = ""

    return RawParse(command, parameters)


__all__ = (
    "RawParse",
    "split",
    "tokenize",
)
