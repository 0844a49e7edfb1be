"""
Failure reporting for assertion helpers.

Assertion helpers report mismatches through the Failing protocol instead of calling the test
framework directly. Production code uses Fail, which fails the running pytest test. Tests of
the helpers themselves pass a FailSpy, which records each failure and lets the test continue.

Example:
    >>> def assert_equal(actual, expected, message="", *, location=None, failure: Failing = Fail()):
    ...     if actual == expected:
    ...         return
    ...     failure.fail(
    ...         f"Expected {describe(expected)}, but was {describe(actual)}" + message_suffix(message),
    ...         location or caller_location(),
    ...     )
"""

# Standard library -----------------------------------------------------------------------------------------------------
import traceback
from typing import NoReturn, Protocol, runtime_checkable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from .location import SourceLocation


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Failing(Protocol):
    """Protocol for reporting a test failure at a source location."""

    __slots__ = ()

    def fail(self, message: str, location: SourceLocation) -> None: ...


class Fail(Failing):
    """
    Report failures to pytest.

    Calls pytest.fail(), so the current test stops at the failing assertion and no later
    statement in it runs. The report holds the message followed by the assertion's location,
    rendered like a traceback frame with its source line.

    Args:
        pytrace: Passed to pytest.fail(). When False (default) pytest shows only the message and
            location; when True it also shows the Python traceback of the failing test.
    """

    __slots__ = ("pytrace",)

    def __init__(self, *, pytrace: bool = False):
        self.pytrace = pytrace

    def fail(self, message: str, location: SourceLocation) -> NoReturn:
        __tracebackhide__ = True
        frame = location.to_frame_summary()
        where = "".join(traceback.StackSummary.from_list([frame]).format())
        pytest.fail(f"{message}\n{where}", pytrace=self.pytrace)

    def __repr__(self) -> str:
        return f"Fail(pytrace={self.pytrace})"


class FailSpy(Failing):
    """
    Test double that records failures instead of reporting them.

    Every call to fail() is kept, in call order. messages[i] and locations[i] belong to the
    same call, and both always hold call_count entries. Create a new instance to start over.

    Not thread-safe; use one instance per test.

    Example:
        >>> spy = FailSpy()
        >>> assert_equal(2, expected=1, failure=spy)
        >>> spy.call_count
        1
        >>> spy.messages
        ('Expected 1, but was 2',)
    """

    __slots__ = ("_call_count", "_messages", "_locations")

    def __init__(self):
        self._call_count = 0
        self._messages: list[str] = []
        self._locations: list[SourceLocation] = []

    @property
    def call_count(self) -> int:
        return self._call_count

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    @property
    def locations(self) -> tuple[SourceLocation, ...]:
        return tuple(self._locations)

    def fail(self, message: str, location: SourceLocation) -> None:
        self._call_count += 1
        self._messages.append(message)
        self._locations.append(location)

    def __repr__(self) -> str:
        return f"FailSpy(call_count={self._call_count}, messages={self._messages!r})"
