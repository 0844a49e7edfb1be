"""
FailKit utilities shared across the package.

Contains object-introspection helpers used by the describers and by argument validation.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Iterator


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix user classes with their module name.
            Builtins are never qualified.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'

        >>> class C: ...
        >>> class_name(C())
        'C'
        >>> class_name(C, fully_qualified=True)
        '__main__.C'
    """
    cls = obj if isinstance(obj, type) else type(obj)

    if fully_qualified and cls.__module__ != "builtins":
        return f"{cls.__module__}.{cls.__qualname__}"
    return cls.__name__


def has_own_repr(obj: Any) -> bool:
    """
    Check whether the class of obj provides a __repr__ other than object.__repr__.

    The inherited object.__repr__ embeds a memory address, so its output differs between
    two equal instances.
    """
    return type(obj).__repr__ is not object.__repr__


def instance_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """
    Yield (name, value) pairs for the instance attributes of obj.

    Slots come first, walking the MRO from the base class down, then the instance __dict__
    in insertion order. Slots that were never assigned are skipped.

    Examples:
        >>> class Point:
        ...     def __init__(self):
        ...         self.x = 1
        ...         self.y = 2
        >>> list(instance_fields(Point()))
        [('x', 1), ('y', 2)]
    """
    seen = set()

    for cls in reversed(type(obj).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in seen:
                continue
            seen.add(name)
            try:
                value = getattr(obj, _mangled(cls, name))
            except AttributeError:
                continue
            yield name, value

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, value in instance_dict.items():
            if name not in seen:
                yield name, value


# Private Methods ------------------------------------------------------------------------------------------------------


def _mangled(cls: type, name: str) -> str:
    """Attribute name under which a private slot like __secret is stored, e.g. _Cls__secret."""
    if name.startswith("__") and not name.endswith("__"):
        owner = cls.__name__.lstrip("_")
        if owner:
            return f"_{owner}{name}"
    return name
