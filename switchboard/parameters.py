r"""
Switchboard parameter specifications.

Overview
- Parameter: one expected value of a command. It is reachable by its canonical
  name, by any alias, or positionally through its 1-based ordinal, and it owns
  the validator applied to the raw string before a command is bound.
- parameter(...): decorator flavour that turns a function into the custom
  validator of a freshly built Parameter.
- default_validator(type): parse-and-discard validator for a data-type tag.

Data-type tags
- str (text), int (integer), bool (boolean), float and decimal.Decimal (decimal).
- numeric tags accept plain numerals only (an optional sign, digits, a decimal
  point, an exponent); "nan", "inf" and digit separators such as "1_000" are
  rejected.
- any other callable is used as a converter: the value is valid when calling it
  with the raw string does not raise TypeError/ValueError/ArithmeticError.
- bool accepts "true"/"false" (any case) and the empty string, since an empty
  value is how a flag present without a payload is reported.

Validation policy
- A custom validator replaces the default one entirely; the two are never combined.
- The validation error message defaults lazily to
  "<name> could not be parsed as type <type>".

Metadata (sanitized on construction)
- name/aliases: non-empty strings with no whitespace that do not start with '-'.
- ordinal: None (named only) or a positive integer.
- type: callable; validator: callable; message/descr: non-empty strings.

Quick example:
    >>> from switchboard.parameters import Parameter, parameter
    >>> name = Parameter("name", "n", ordinal=1, descr="who to greet")
    >>> @parameter("times", "t", type=int)
    ... def times(value):
    ...     return value.isdigit() and 0 < int(value) <= 10
"""
import functools
import re
from decimal import Decimal

from .utils import *


def _boolean(value, /):
    if value.strip().lower() not in ("", "true", "false"):
        raise ValueError("not a boolean: %r" % value)
    return value.strip().lower() == "true" or not value.strip()


def _integer(value, /):
    if not re.fullmatch(r"[+-]?[0-9]+", value.strip()):
        raise ValueError("not an integer: %r" % value)
    return int(value)


def _numeral(type, /):
    # plain finite numerals only: no "nan", "inf" or "1_000"
    @rename("_" + type.__name__.lower())
    def converter(value, /):
        if not re.fullmatch(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?", value.strip()):
            raise ValueError("not a finite number: %r" % value)
        return type(value)

    return converter


_converters = {
    bool: _boolean,
    int: _integer,
    float: _numeral(float),
    Decimal: _numeral(Decimal),
}


@functools.cache
def default_validator(type, /):
    """
    Build (and cache) the parse-and-discard validator for a data-type tag.

    The returned callable answers True when the raw string converts to the
    given type, False otherwise. The converted value is discarded.
    """
    if not callable(type):
        raise TypeError("default_validator() argument must be callable")
    converter = _converters.get(type, type)

    @rename("validate_" + getattr(type, "__name__", "value").lower())
    def validator(value, /):
        try:
            converter(value)
        except (TypeError, ValueError, ArithmeticError):
            return False
        return True

    return validator


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate parameter metadata in place.

    Raises
    - TypeError: a field has the wrong type.
    - ValueError: a string is empty after trimming, a name is malformed, or the
      ordinal is not positive.

    Notes
    - duplicate names/aliases are not rejected here; the registry checks them
      across the whole parameter set of a command.
    """
    metadata["name"] = sanitize_name(cls, metadata["name"])
    metadata["aliases"] = tuple(sanitize_name(cls, alias) for alias in metadata["aliases"])

    ordinal = metadata["ordinal"]
    if ordinal is not None:
        if isinstance(ordinal, bool) or not isinstance(ordinal, int):
            raise TypeError(f"{cls.__typename__} 'ordinal' must be an integer")
        if ordinal < 1:
            raise ValueError(f"{cls.__typename__} 'ordinal' must be a positive integer")

    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if (validator := metadata["validator"]) is not Unset and not callable(validator):
        raise TypeError(f"{cls.__typename__} 'validator' must be callable")

    for field in ("message", "descr"):
        if not isinstance(value := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        metadata[field] = value


class Parameter(metaclass=SchemaType):
    """
    Named, aliasable, optionally positional parameter specification.

    Properties
    - name, aliases, ordinal, type, descr: sanitized metadata (read-only).
    - names: the canonical name followed by the aliases.
    - typename: label of the data type used in messages and help.
    - validator: the custom validator, or the type's default validator.
    - message: the configured validation error message, or the default one.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "ordinal",
        "type",
        "validator",
        "message",
        "descr",
    )

    __displayable__ = (
        "name",
        "aliases",
        "ordinal",
        "type",
        "descr",
    )

    def __new__(
            cls,
            name,
            /,
            *aliases,
            ordinal=None,
            type=str,
            validator=Unset,
            message=Unset,
            descr=Unset,
    ):
        """
        Construct a Parameter spec.

        Parameters
        - name: str
          Canonical name, matched case-insensitively against '-name' tokens.
        - aliases: str
          Alternative names (e.g. "n" for "name").
        - ordinal: int | None
          1-based position used when the value is given without a name.
        - type: Callable
          Data-type tag (str, int, bool, float, Decimal) or any converter.
        - validator: Callable[[str], bool]
          Custom validator; replaces the default validation of 'type'.
        - message: str
          Error message reported when validation fails.
        - descr: str
          Short description for help.
        """
        metadata = {
            "name": name,
            "aliases": aliases,
            "ordinal": ordinal,
            "type": type,
            "validator": validator,
            "message": message,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for field, value in metadata.items():
            setattr(self, "_" + field, value)
        return self

    @property
    def names(self):
        return (self._name, *self._aliases)

    @property
    def typename(self):
        return getattr(self._type, "__name__", repr(self._type))

    @property
    def validator(self):
        return coalesce(self._validator, default_validator(self._type))

    @property
    def message(self):
        return coalesce(self._message, f"{self._name} could not be parsed as type {self.typename}")

    @property
    def descr(self):
        return coalesce(self._descr)

    def validate(self, value, /):
        """
        Run the effective validator over a raw string value.

        A validator that raises TypeError, ValueError or ArithmeticError on the
        value rejects it.
        """
        try:
            return bool(self.validator(value))
        except (TypeError, ValueError, ArithmeticError):
            return False


def parameter(*args, **kwargs):
    """
    Decorator/factory for defining a parameter with a custom validator.

    Usage
        @parameter("port", "p", ordinal=1, type=int)
        def port(value):
            return value.isdigit() and 0 < int(value) < 65536

    Behavior
    - Builds a Parameter from *args/**kwargs (a 'validator' keyword is rejected,
      the decorated function is the validator).
    - Returns the Parameter, not the function.
    """
    if "validator" in kwargs:
        raise TypeError("@parameter() takes its validator from the decorated function")
    parameter = Parameter(*args, **kwargs)

    @rename("parameter")
    def wrapper(validator, /):
        if not callable(validator):
            raise TypeError("@parameter() must be applied to a callable")
        if parameter._validator is not Unset:
            raise TypeError("@parameter() must be applied only once")
        parameter._validator = validator
        return parameter

    return wrapper


__all__ = (
    "Parameter",
    "parameter",
    "default_validator",
)
