"""
argtree utilities shared by the tree, routing and execution layers.

Contents
- Unset: the "not provided" sentinel used as a keyword default wherever None is
  a meaningful value (a command without a shape, a group without a
  description). coalesce() turns it into a concrete default.
- rename(): decorator giving generated methods a readable __name__/__qualname__.
- mirror(): read-only property over a private "_name" attribute; containers are
  handed out as copies so tree nodes cannot be mutated through their getters.
- camelize() / kebabize(): flag spelling ("dry-run") to field spelling
  ("dryRun") and back.
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: a falsey singleton that cannot be subclassed.

    It takes part in PEP 604 unions so that checks such as
    isinstance(value, str | Unset) read naturally.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
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
    Return default when object is Unset, object otherwise (None and other
    falsey values included).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _immortalize(object):
    # lists, dicts and sets are copied all the way down; tuples come back as lists
    if isinstance(object, Sequence) and not isinstance(object, str):
        return [_immortalize(item) for item in object]
    if isinstance(object, Mapping):
        return {key: _immortalize(value) for key, value in object.items()}
    if isinstance(object, Set):
        return {_immortalize(item) for item in object}
    return coalesce(object)


def mirror(name, /):
    """
    Read-only property returning a copy of self._<name> (Unset reads as None).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def camelize(text, /):
    """
    "dry-run" -> "dryRun". Only a hyphen before a lowercase ASCII letter is
    folded, so odd spellings still land under a predictable key.
    """
    return re.sub(r"-([a-z])", lambda match: match[1].upper(), text)


@functools.cache
def kebabize(text, /):
    """
    "outputFormat" -> "output-format".
    """
    return re.sub(r"[A-Z]", lambda match: "-" + match[0].lower(), text)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "camelize",
    "kebabize",
    "UnsetType",
    "Unset",
)
