"""
Argot utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the registry, the bindings and the faults.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks and reprs.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr), copying
    containers so the public view cannot mutate registry state.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Registration calls use it where None could be confused with a real choice
    (e.g., a missing short key versus a caller that forwards None by mistake).

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are returned as-is; only Unset is replaced.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
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


def _immortalize(object):
    """
    Recursively copy container values so callers never share registry state.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    else:
        return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are returned as fresh immutable copies (tuple/frozenset) or
    plain dict copies, so mutating the result never reaches the instance.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Typical pattern: value = coalesce(user_value, default) to materialize a fallback
only when user_value is Unset (None and other falsey values are preserved).
"""


class IntrospectableType(type):
    """
    Metaclass that turns classes into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
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

            Example
            - flag(short='s', long='enable-speedy-mode', default='false', descr=None)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
)
