"""
Argot registry entries.

Overview
- Entries
  • Option: named, value-bearing entry (e.g., -n / --num-cakes) bound to a typed
    destination; set(text) converts and stores the parameter.
  • Flag: named, presence-only entry (e.g., -s / --enable-speedy-mode); set(text)
    ignores the text and stores the negation of the declared default.

- Identity
  • short: one character, introduced on the command line by '-'.
  • long: a word, introduced on the command line by '--'.
  At least one of both is required. Uniqueness across entries is enforced by
  the registry (argot.parser.Parser), not here.

- Introspection & representation
  • IntrospectableType (argot.utils) provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- short: Unset | str, exactly one character, neither '-' nor '='.
- long: Unset | str, non-empty, must not start with '-' nor contain '='.
- descr: Unset | str, non-empty when provided (defaults to None).
- default: display text used by help output ("true"/"false" for flags, the
  destination's value captured at registration for options, None when unset).

Quick example:
    >>> from argot.bindings import bind
    >>> options = {"cakes": 0}
    >>> entry = Option(bind(options, "cakes"), "n", "num-cakes")
    >>> entry.set("12"), options["cakes"]
    (True, 12)
"""
from .bindings import Binding, BooleanBinding
from .utils import *


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the identity and description of an entry.

    Responsibilities
    - short: Unset or a single character that is neither '-' nor '='.
    - long: Unset or a non-empty word that does not start with '-' and does not
      contain '='.
    - at least one of short/long must be given.
    - descr: Unset or a non-empty string after trimming (Unset becomes None).

    Raises
    - TypeError: wrong types, or neither key given.
    - ValueError: malformed keys or an empty description.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and (len(short) != 1 or short in "-="):
        raise ValueError(f"{cls.__typename__} 'short' must be a single character other than '-' and '='")

    if not isinstance(long := metadata["long"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not long:
        raise ValueError(f"{cls.__typename__} 'long' cannot be empty")
    elif isinstance(long, str) and (long.startswith("-") or "=" in long):
        raise ValueError(f"{cls.__typename__} 'long' cannot start with '-' nor contain '='")

    if short is Unset and long is Unset:
        raise TypeError(f"{cls.__typename__} must specify at least a 'short' or a 'long' key")

    metadata["short"] = coalesce(short)
    metadata["long"] = coalesce(long)

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)


class Option(metaclass=IntrospectableType):
    """
    Named, value-bearing entry.

    An Option couples its keys and help metadata with a binding; the binding
    decides how the parameter text is converted and where it is stored. The
    default display text is captured from the destination when the entry is
    built, so later parses do not change what help shows.
    """

    __introspectable__ = (
        "short",
        "long",
        "default",
        "descr",
        "binding",
    )

    __displayable__ = (
        "short",
        "long",
        "default",
        "descr",
    )

    def __new__(cls, binding, /, short=Unset, long=Unset, descr=Unset):
        """
        Construct an Option over a binding.

        Parameters
        - binding: Binding
          Typed setter over the destination (see argot.bindings.bind).
        - short: Unset | str
          One-character key, used as -x.
        - long: Unset | str
          Word key, used as --word.
        - descr: Unset | str
          Short description for help. If Unset, becomes None.
        """
        if not isinstance(binding, Binding):
            raise TypeError(f"{cls.__typename__} 'binding' must be a binding")

        metadata = {
            "short": short,
            "long": long,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._binding = binding
        self._default = binding.display()
        return self

    def set(self, text, /):
        """
        Convert and store the parameter; False (destination unchanged) when it does not fit.
        """
        return self._binding.set(text)


class Flag(metaclass=IntrospectableType):
    """
    Named, presence-only entry.

    Applying a flag stores `not default` into its destination. Applying it
    again stores the same value, so repeating a flag is harmless.
    """

    __introspectable__ = (
        "short",
        "long",
        "default",
        "descr",
        "binding",
    )

    __displayable__ = (
        "short",
        "long",
        "default",
        "descr",
    )

    def __new__(cls, binding, /, short=Unset, long=Unset, descr=Unset, *, default=False):
        """
        Construct a Flag over a boolean binding.

        Parameters
        - binding: BooleanBinding
        - short / long / descr: as for Option.
        - default: bool
          Value the destination holds when the flag is absent.
        """
        if not isinstance(binding, BooleanBinding):
            raise TypeError(f"{cls.__typename__} 'binding' must be a boolean binding")
        if not isinstance(default, bool):
            raise TypeError(f"{cls.__typename__} 'default' must be a boolean")

        metadata = {
            "short": short,
            "long": long,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._binding = binding
        self._default = binding.render(default)
        self._toggled = not default
        return self

    def set(self, text=Unset, /):
        """
        Store the negated default; the text is ignored and the call never fails.
        """
        self._binding.put(self._toggled)
        return True


__all__ = (
    "Option",
    "Flag",
)
