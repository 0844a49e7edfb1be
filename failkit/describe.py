"""
Value descriptions for test failure messages.

describe() turns any value into a display string through a chain of describers. Each link
either renders the value or defers to the links after it; the chain always ends in a fallback
that accepts everything, so describing never fails.

Default chain:
    OPTIONAL  None → "nil"; present optionals pass through to the next link
    TEXT      str → double-quoted, with quote, newline, carriage return and tab escaped
    FALLBACK  builtin containers and dataclasses item by item, repr() when the class defines one,
              otherwise TypeName(field: value, ...)
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import functools
import inspect
import reprlib
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, has_own_repr, instance_fields


# Classes --------------------------------------------------------------------------------------------------------------

class DescribeConf:
    """
    Default constants for value descriptions and failure message formatting.

    Attributes:
        NIL: Description of an absent optional value (None).
        QUOTE: Quote character wrapped around text values.
        ESCAPES: Characters escaped inside quoted text. Nothing else is escaped,
            backslashes included.
        MAX_DEPTH: Nesting limit for item-by-item descriptions of containers, dataclasses and
            plain objects. Deeper values are shown as TypeName(...) or [...].
        SUFFIX_SEPARATOR: Separator placed before a user message by message_suffix().
    """

    NIL = "nil"
    QUOTE = '"'
    ESCAPES = {
        '"': '\\"',
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
    MAX_DEPTH = 8
    SUFFIX_SEPARATOR = " - "


@dataclass(frozen=True, slots=True)
class Describer:
    """
    A single link in a describer chain: a predicate paired with a renderer.

    Attributes:
        name: Short label, used in repr and error messages.
        accepts: Returns True when this link handles the value.
        render: Called as render(value, chain, position, depth) for accepted values. position is
            this link's index in the chain, so a renderer can delegate to the links after it.
            depth is the nesting level of the value being described.
        terminal: True for a link that accepts every value. A chain must end with one.
    """

    name: str
    accepts: Callable[[Any], bool]
    render: Callable[[Any, "DescriberChain", int, int], str]
    terminal: bool = False


class DescriberChain:
    """
    Immutable, ordered chain of describers.

    The value is offered to each link in turn; the first link that accepts it produces the
    description. The last link must be terminal, which makes describe() total.

    Examples:
        >>> chain = DescriberChain([OPTIONAL, TEXT, FALLBACK])
        >>> chain.describe("hi")
        '"hi"'
        >>> chain.describe(None)
        'nil'
    """

    __slots__ = ("_links",)

    def __init__(self, links: Sequence[Describer]):
        links = tuple(links)
        if not links:
            raise ValueError("describer chain requires at least one link")
        for link in links:
            if not isinstance(link, Describer):
                raise TypeError(f"describer chain links must be Describer instances, but got {class_name(link)}")
        if not links[-1].terminal:
            raise ValueError(f"describer chain must end with a terminal link, but ends with {links[-1].name!r}")
        self._links = links

    @property
    def links(self) -> tuple[Describer, ...]:
        return self._links

    def describe(self, value: Any, *, start: int = 0, depth: int = 0) -> str:
        """
        Describe value starting at the link with index start.

        The terminal link accepts anything, so a link is always found when start is within the chain.
        """
        for position in range(start, len(self._links)):
            link = self._links[position]
            if link.terminal or link.accepts(value):
                return link.render(value, self, position, depth)
        raise IndexError(f"start position {start} is outside the chain of {len(self._links)} links")

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        names = " → ".join(link.name for link in self._links)
        return f"DescriberChain({names})"


# Renderers ------------------------------------------------------------------------------------------------------------


def _render_optional(value: Any, chain: DescriberChain, position: int, depth: int) -> str:
    if value is None:
        return DescribeConf.NIL
    # A present optional is its own inner value
    return chain.describe(value, start=position + 1, depth=depth)


def _render_text(value: str, chain: DescriberChain, position: int, depth: int) -> str:
    quote = DescribeConf.QUOTE
    return quote + value.translate(_ESCAPE_TABLE) + quote


def _render_fallback(value: Any, chain: DescriberChain, position: int, depth: int) -> str:
    if type(value) in _BRACKETS:
        return _render_container(value, chain, depth)
    if _has_generated_dataclass_repr(value):
        return _render_dataclass(value, chain, depth)
    if has_own_repr(value):
        return _safe_repr(value)

    name = class_name(value)
    if depth >= DescribeConf.MAX_DEPTH:
        return f"{name}(...)"

    fields = ", ".join(
        f"{field}: {chain.describe(field_value, depth=depth + 1)}"
        for field, field_value in instance_fields(value)
    )
    return f"{name}({fields})"


def _render_container(value: Any, chain: DescriberChain, depth: int) -> str:
    """Builtin containers in their literal syntax, with items described by the chain."""
    if not value:
        return repr(value)

    opening, closing = _BRACKETS[type(value)]
    if depth >= DescribeConf.MAX_DEPTH:
        return f"{opening}...{closing}"

    nested = depth + 1
    if isinstance(value, dict):
        items = [
            f"{chain.describe(key, depth=nested)}: {chain.describe(item, depth=nested)}"
            for key, item in value.items()
        ]
    else:
        items = [chain.describe(item, depth=nested) for item in value]
        if isinstance(value, (set, frozenset)):
            # Set iteration order is arbitrary
            items.sort()
        elif isinstance(value, tuple) and len(items) == 1:
            return f"({items[0]},)"
    return opening + ", ".join(items) + closing


def _render_dataclass(value: Any, chain: DescriberChain, depth: int) -> str:
    """Dataclasses in their generated repr layout, with field values described by the chain."""
    name = type(value).__qualname__
    if depth >= DescribeConf.MAX_DEPTH:
        return f"{name}(...)"

    fields = ", ".join(
        f"{field.name}={chain.describe(getattr(value, field.name), depth=depth + 1)}"
        for field in dataclasses.fields(value)
        if field.repr
    )
    return f"{name}({fields})"


_BRACKETS = {
    list: ("[", "]"),
    tuple: ("(", ")"),
    dict: ("{", "}"),
    set: ("{", "}"),
    frozenset: ("frozenset({", "})"),
}

_RECURSION_GUARD_FILES = frozenset({dataclasses.__file__, reprlib.__file__})

_ESCAPE_TABLE = str.maketrans(DescribeConf.ESCAPES)

OPTIONAL = Describer("optional", lambda value: value is None, _render_optional)
TEXT = Describer("text", lambda value: isinstance(value, str), _render_text)
FALLBACK = Describer("fallback", lambda value: True, _render_fallback, terminal=True)


# Methods --------------------------------------------------------------------------------------------------------------


@functools.cache
def default_chain() -> DescriberChain:
    """Return the process-wide default chain: optional, then text, then fallback."""
    return DescriberChain([OPTIONAL, TEXT, FALLBACK])


def describe(value: Any) -> str:
    """
    Describe a value for use in a test failure message.

    Strings are quoted with special characters escaped, None is shown as "nil",
    and anything else uses its repr(). Builtin containers and dataclasses describe their
    items the same way, and plain objects without their own __repr__ are
    shown field by field instead of by memory address.

    Args:
        value: Any Python object.

    Returns:
        The display string. Never raises for a misbehaving __repr__.

    Examples:
        >>> describe(42)
        '42'
        >>> describe('a"b')
        '"a\\\\"b"'
        >>> describe(None)
        'nil'
        >>> class Box:
        ...     def __init__(self):
        ...         self.value = 42
        >>> describe(Box())
        'Box(value: 42)'
    """
    return default_chain().describe(value)


# Private Methods ------------------------------------------------------------------------------------------------------


def _safe_repr(value: Any) -> str:
    """
    Defensive repr() call, a broken __repr__ gets a placeholder and a RuntimeWarning
    """
    try:
        return repr(value)
    except Exception as e:
        name = class_name(value)
        warnings.warn(
            f"repr() of {name} object failed with {type(e).__name__}, describing it with a placeholder",
            RuntimeWarning,
            stacklevel=_caller_stacklevel(),
        )
        return f"<{name} object (repr failed: {type(e).__name__})>"


def _has_generated_dataclass_repr(value: Any) -> bool:
    """Check for a dataclass whose __repr__ was generated by @dataclass rather than written by hand."""
    cls = type(value)
    if not dataclasses.is_dataclass(cls):
        return False
    params = getattr(cls, "__dataclass_params__", None)
    if params is None or not params.repr:
        return False
    # The generated __repr__ is wrapped by a recursion guard living in dataclasses or reprlib
    repr_fn = cls.__repr__
    code = getattr(repr_fn, "__code__", None)
    return hasattr(repr_fn, "__wrapped__") or (code is not None and code.co_filename in _RECURSION_GUARD_FILES)


def _caller_stacklevel() -> int:
    """Stack level of the first frame outside failkit, seen from the function calling warnings.warn()."""
    frame = inspect.currentframe().f_back
    level = 1
    while frame is not None and frame.f_globals.get("__name__", "").startswith("failkit."):
        frame = frame.f_back
        level += 1
    return level
