"""
Small helpers shared by the alias, task and dispatch layers.

- Unset: "not provided" marker, distinct from None (None is a valid project).
- coalesce(): replace Unset with a default.
- rename(): decorator giving generated callables a stable name.
- freeze(): read-only snapshot of a container.
- mglob(): expand a dotted module glob such as "leiningen.*".

    >>> coalesce(Unset, "help")
    'help'
    >>> coalesce(None, "help") is None
    True
    >>> freeze(["with-profile", "offline"])
    ('with-profile', 'offline')
"""
import functools
import importlib
import itertools
import pkgutil
import re
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: a falsy singleton that survives copy and pickle.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """object, unless it is Unset; falsy values such as None or "" are kept."""
    return object if object is not Unset else default


def rename(name, /):
    """decorator setting __name__ and __qualname__ of the decorated callable."""
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def wrapper(callable, /):
        callable.__name__ = callable.__qualname__ = name
        return callable

    return wrapper


def freeze(object, /):
    """
    Shallow read-only snapshot.

    sequences (strings excluded) become tuples, mappings a proxy over a private
    copy, sets a frozenset; anything else is returned unchanged.
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return object


_IDENTIFIER = re.compile(r"(?!\d)\w+")
_WILDCARDS = re.compile(r"\\(.)|(\*)|(\?)|\[(!?)([^\]]+)\]|(.)", re.DOTALL)


def _translate(segment):
    def convert(match):
        escaped, star, question, negated, chars, literal = match.groups()
        if star:
            return r"[^.]*"
        if question:
            return r"[^.]"
        if chars is not None:
            return "[%s%s]" % ("^" if negated else "", chars)
        return re.escape(literal if escaped is None else escaped)

    return _WILDCARDS.sub(convert, segment)


@functools.cache
def _compile(pattern):
    regex = []
    for index, segment in enumerate(pattern.split(".")):
        if segment == "**":
            regex.append(r"(?:\.[^.]+)*")
        else:
            regex.append((r"\." if index else "") + _translate(segment))
    return re.compile("".join(regex))


def mglob(pattern, /):
    """
    expand a module glob into sorted module names.

    within a segment '*' and '?' never cross a dot and '[...]' / '[!...]' are
    character classes; a '**' segment spans any number of segments. the glob
    must start with a concrete package, which is imported and walked; when
    that package cannot be imported the result is empty. a glob without
    wildcards is returned as is.
    """
    if not isinstance(pattern, str):
        raise TypeError("mglob() argument must be a string")
    if not (pattern := pattern.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    segments = pattern.split(".")
    concrete = list(itertools.takewhile(_IDENTIFIER.fullmatch, segments))
    if len(concrete) == len(segments):
        return [pattern]
    if not concrete:
        raise ValueError("mglob() pattern must start with a concrete package")

    root = ".".join(concrete)
    try:
        package = importlib.import_module(root)
    except ImportError:
        return []

    regex = _compile(pattern)
    names = {root} if regex.fullmatch(root) else set()
    for module in pkgutil.walk_packages(getattr(package, "__path__", ()), root + "."):
        if regex.fullmatch(module.name):
            names.add(module.name)
    return sorted(names)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "freeze",
    "mglob",
    "UnsetType",
    "Unset",
)
