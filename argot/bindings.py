"""
Argot bindings: typed setters over host-owned destinations.

Overview
- A destination is a slot: (target, name) where target is either an object
  (attribute access) or a mutable mapping (item access). Bindings keep a
  back-reference to the target and never own it.
- Every binding answers set(text) -> bool: convert the text, store the value,
  report success. A failed conversion leaves the destination untouched.

Binding kinds (closed set)
- BooleanBinding     bool              synonyms from coercion.TRUE_STRINGS/FALSE_STRINGS
- SignedBinding      Int8 .. Int64     decimal/hex/negative hex, saturating
- UnsignedBinding    UInt8 .. UInt64   decimal/hex, saturating
- FloatBinding       Float32/Float64   general or hex notation, saturating
- CharBinding        Char              exactly one character
- TextBinding        str               verbatim copy, never fails

Optional-wrapped bindings
- Any kind can be optional: the destination starts as None ("unset") and the
  first successful set() gives it a value. The parser does not treat a missing
  optional as an error; the host checks for None after parsing.

Width markers
- Int8 .. UInt64, Float32, Float64 and Char are typing.Annotated aliases of
  int/float/str. Hosts annotate their option holders with them:

    @dataclass
    class Options:
        cakes: Int32 = 0
        fraction: Float32 = 1.0
        initial: Char = "a"
        required: Int32 | None = None

  bind() reads the annotation (or an explicit type=...) and picks the kind.
  Plain int is Int64 and plain float is Float64.
"""
import builtins
import typing
from collections import namedtuple
from collections.abc import Mapping, MutableMapping
from types import NoneType, UnionType
from typing import Annotated

from . import coercion
from .utils import *

Integral = namedtuple("Integral", ("bits", "signed"))
Floating = namedtuple("Floating", ("bits",))
Character = namedtuple("Character", ())

Int8 = Annotated[int, Integral(8, True)]
Int16 = Annotated[int, Integral(16, True)]
Int32 = Annotated[int, Integral(32, True)]
Int64 = Annotated[int, Integral(64, True)]
UInt8 = Annotated[int, Integral(8, False)]
UInt16 = Annotated[int, Integral(16, False)]
UInt32 = Annotated[int, Integral(32, False)]
UInt64 = Annotated[int, Integral(64, False)]
Float32 = Annotated[float, Floating(32)]
Float64 = Annotated[float, Floating(64)]
Char = Annotated[str, Character()]


class Binding(metaclass=IntrospectableType):
    """
    Base binding: slot access plus the set() protocol.

    Subclasses implement convert(text) (raise ValueError on bad text) and may
    override render(value) for the default-value display text.
    """
    __introspectable__ = ("name", "optional")
    __expects__ = "a value"

    def __init__(self, target, name, /, *, optional=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name:
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")
        if isinstance(target, Mapping) and not isinstance(target, MutableMapping):
            raise TypeError(f"{type(self).__typename__} mapping 'target' must be mutable")
        self._target = target
        self._name = name
        self._optional = bool(optional)

    @property
    def target(self):
        return self._target

    def get(self):
        if isinstance(self._target, Mapping):
            return self._target[self._name]
        return getattr(self._target, self._name)

    def put(self, value, /):
        if isinstance(self._target, Mapping):
            self._target[self._name] = value
        else:
            setattr(self._target, self._name, value)

    def convert(self, text, /):
        raise NotImplementedError

    def render(self, value, /):
        return str(value)

    def set(self, text, /):
        """
        Convert text and store it; return False (destination unchanged) on bad text.
        """
        try:
            value = self.convert(text)
        except ValueError:
            return False
        self.put(value)
        return True

    def display(self):
        """
        Default-value display text for help output, or None when there is none.

        Unset optional destinations (None) and missing slots have no default.
        """
        try:
            value = self.get()
        except (AttributeError, KeyError):
            return None
        if value is None:
            return None
        return self.render(value)


class BooleanBinding(Binding):
    __expects__ = "a boolean (%s)" % " or ".join(("/".join(coercion.TRUE_STRINGS), "/".join(coercion.FALSE_STRINGS)))

    def convert(self, text, /):
        return coercion.boolean(text)

    def render(self, value, /):
        return "true" if value else "false"


def _sanitize_bits(cls, bits, allowed):
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise TypeError(f"{cls.__typename__} 'bits' must be an integer")
    elif bits not in allowed:
        raise ValueError(f"{cls.__typename__} 'bits' must be within {min(allowed)}..{max(allowed)}")
    return bits


class SignedBinding(Binding):
    __introspectable__ = ("name", "optional", "bits")
    __expects__ = "a signed integer (decimal, 0x hex or -0x hex)"

    def __init__(self, target, name, /, bits=64, *, optional=False):
        super().__init__(target, name, optional=optional)
        self._bits = _sanitize_bits(type(self), bits, range(1, 65))

    def convert(self, text, /):
        return coercion.signed(text, self._bits)


class UnsignedBinding(Binding):
    __introspectable__ = ("name", "optional", "bits")
    __expects__ = "a non-negative integer (decimal or 0x hex)"

    def __init__(self, target, name, /, bits=64, *, optional=False):
        super().__init__(target, name, optional=optional)
        self._bits = _sanitize_bits(type(self), bits, range(1, 65))

    def convert(self, text, /):
        return coercion.unsigned(text, self._bits)


class FloatBinding(Binding):
    __introspectable__ = ("name", "optional", "bits")
    __expects__ = "a number (for example: 1.5, 2e10, inf or 0x1.8p3)"

    def __init__(self, target, name, /, bits=64, *, optional=False):
        super().__init__(target, name, optional=optional)
        self._bits = _sanitize_bits(type(self), bits, (32, 64))

    def convert(self, text, /):
        return coercion.floating(text, self._bits)


class CharBinding(Binding):
    __expects__ = "exactly one character"

    def convert(self, text, /):
        return coercion.character(text)


class TextBinding(Binding):
    __expects__ = "any text"

    def convert(self, text, /):
        return text

    def render(self, value, /):
        return '"%s"' % value


def _annotation(target, name):
    """
    Declared type of a slot: class annotation first, then the current value's type.
    """
    if not isinstance(target, Mapping):
        try:
            hints = typing.get_type_hints(builtins.type(target), include_extras=True)
        except (NameError, TypeError):
            hints = {}
        if name in hints:
            return hints[name]

    try:
        value = target[name] if isinstance(target, Mapping) else getattr(target, name)
    except (KeyError, AttributeError):
        raise TypeError(f"cannot infer the type of destination {name!r}, pass 'type' explicitly") from None
    if value is None:
        raise TypeError(f"cannot infer the type of unset destination {name!r}, pass 'type' explicitly")
    return builtins.type(value)


def bind(target, name, /, type=Unset):
    """
    Build the binding matching the declared type of a destination slot.

    Resolution
    - type: explicit annotation-like value (bool, int, Int32, Char, float | None, ...).
    - otherwise the class annotation of target (typing.get_type_hints, with extras).
    - otherwise the runtime type of the slot's current value.

    Optional[X] / X | None selects the optional-wrapped variant of X.

    Raises
    - TypeError: when the type cannot be inferred or no binding kind supports it.
    """
    annotation = type if type is not Unset else _annotation(target, name)
    optional = False

    if typing.get_origin(annotation) in (typing.Union, UnionType):
        arguments = typing.get_args(annotation)
        if NoneType not in arguments or len(arguments) != 2:
            raise TypeError(f"destination {name!r} type {annotation!r} must be a single type or its optional form")
        annotation, = (argument for argument in arguments if argument is not NoneType)
        optional = True

    metadata = ()
    if typing.get_origin(annotation) is Annotated:
        annotation, *metadata = typing.get_args(annotation)

    for marker in metadata:
        match marker:
            case Integral(bits, True):
                return SignedBinding(target, name, bits, optional=optional)
            case Integral(bits, False):
                return UnsignedBinding(target, name, bits, optional=optional)
            case Floating(bits):
                return FloatBinding(target, name, bits, optional=optional)
            case Character():
                return CharBinding(target, name, optional=optional)

    if annotation is bool:
        return BooleanBinding(target, name, optional=optional)
    if annotation is int:
        return SignedBinding(target, name, 64, optional=optional)
    if annotation is float:
        return FloatBinding(target, name, 64, optional=optional)
    if annotation is str:
        return TextBinding(target, name, optional=optional)

    raise TypeError(f"destination {name!r} has an unsupported type {annotation!r}")


__all__ = (
    # Width markers
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "Char",

    # Bindings
    "Binding",
    "BooleanBinding",
    "SignedBinding",
    "UnsignedBinding",
    "FloatBinding",
    "CharBinding",
    "TextBinding",

    # Dispatch
    "bind",
)
