"""
Switchboard utilities shared by the schema, parsing and dispatch layers.

Sentinel
- Unset marks "no value was given" where None is a value a caller may pass.
  It is falsey, prints as "Unset", pickles back to the same object and can be
  used in isinstance unions (str | Unset).
- coalesce(value, default) swaps Unset for a default and leaves every other
  value alone, falsey ones included.

Callables
- rename(callable, name) / @rename(name) gives generated functions a stable
  __name__ and __qualname__ so they read well in reprs and tracebacks.

Schemas
- SchemaType is the metaclass of Parameter and Command. Every field listed in a
  class's __introspectable__ becomes a read-only property over "_<field>", and
  instances get a repr built from __displayable__ (or __introspectable__).
- mirror(field) is the read-only property used for those fields; containers
  come back as fresh copies, so a registered schema cannot be edited through
  its public attributes.
- sanitize_name(cls, name) validates command, alias and parameter names.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
import re
from collections.abc import Mapping, Sequence
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel. There is exactly one instance.
    """
    __slots__ = ()

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    # isinstance(value, str | Unset)
    def __or__(self, other, /):
        return type(self) | other

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return object, or default when object is Unset.
    """
    if object is Unset:
        return default
    return object


def _rename(callable, name, /):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    callable.__name__ = callable.__qualname__ = name
    return callable


def rename(*parameters):
    """
    Rename a callable in place, or build a decorator that will.

    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    if len(parameters) == 2:
        return _rename(*parameters)
    if len(parameters) != 1:
        raise TypeError("rename() takes 1 or 2 arguments (%d given)" % len(parameters))

    name, = parameters
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    return _rename(lambda callable: _rename(callable, name), "rename")


@functools.singledispatch
def _snapshot(object, /):
    return object


@_snapshot.register(str)
@_snapshot.register(bytes)
def _(object, /):
    return object


@_snapshot.register(Sequence)
def _(object, /):
    return tuple(_snapshot(item) for item in object)


@_snapshot.register(Mapping)
def _(object, /):
    return {key: _snapshot(value) for key, value in object.items()}


def mirror(field, /):
    """
    Read-only property over the private attribute "_<field>".

    Sequences come back as tuples and mappings as new dicts.
    """
    if not isinstance(field, str):
        raise TypeError("mirror() argument must be a string")
    attribute = "_" + field

    def getter(self):
        return _snapshot(getattr(self, attribute))

    return property(_rename(getter, field), doc="read-only view of %r" % attribute)


def _schema_rich_repr(self):
    cls = type(self)
    for field in coalesce(cls.__displayable__, cls.__introspectable__):
        yield field, getattr(self, field)


def _schema_repr(self):
    fields = ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
    return "%s(%s)" % (type(self).__typename__, fields)


class SchemaType(type):
    """
    Metaclass of the schema classes (Parameter, Command).

    - __typename__: the class name split on capitals and lower-cased
      ("Parameter" -> "parameter"); used in reprs and sanitizer messages.
    - __introspectable__: fields exposed through mirror(); a field the class
      body already defines (e.g. a computed property) is left alone.
    - __displayable__: fields shown by repr() and rich; defaults to all
      introspectable ones.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        namespace = dict(namespace)
        for field in namespace.get("__introspectable__", ()):
            namespace.setdefault(field, mirror(field))
        namespace.setdefault("__typename__", re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower())
        namespace.setdefault("__repr__", _rename(_schema_repr, "__repr__"))
        namespace.setdefault("__rich_repr__", _rename(_schema_rich_repr, "__rich_repr__"))
        return super().__new__(cls, name, bases, namespace)


def sanitize_name(cls, name, /):
    """
    Validate a command, alias or parameter name and return it stripped.

    Raises TypeError for non-strings, ValueError for empty names and for names
    that contain whitespace or start with '-'.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    if not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
    if not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"{cls.__typename__} name {name!r} cannot contain spaces or start with '-'")
    return name


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "SchemaType",
    "sanitize_name",
)
