"""
Source locations for assertion failures.

A SourceLocation records where an assertion was written, not where the failure is reported.
Assertion helpers capture it from their caller's frame with caller_location() and hand it to
a Failing implementation, which converts it to the traceback.FrameSummary that Python's own
traceback rendering uses.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import traceback
from dataclasses import dataclass
from inspect import stack

# Local ----------------------------------------------------------------------------------------------------------------
from .describe import describe
from .utils import class_name


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Immutable call-site record of an assertion.

    Attributes:
        file_id: Dotted module name of the call site, e.g. "tests.test_totals".
        file_path: File name as compiled into the calling code object.
        line: 1-based line number.
        column: 1-based column of the call expression, 0 when unknown.

    Raises:
        TypeError: If file_id or file_path is not a str, or line or column is not an int.
        ValueError: If line or column is negative.
    """

    file_id: str
    file_path: str
    line: int
    column: int

    def __post_init__(self):
        for field_name in ("file_id", "file_path"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise TypeError(f"{field_name} must be a str, but got {class_name(value)}")
        for field_name in ("line", "column"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field_name} must be an int, but got {class_name(value)}")
            if value < 0:
                raise ValueError(f"{field_name} must be 0 or greater, but got {describe(value)}")

    @classmethod
    def caller(cls, depth: int = 1) -> "SourceLocation":
        """Alias of caller_location() for use as SourceLocation.caller()."""
        return caller_location(depth + 1)

    def to_frame_summary(self) -> traceback.FrameSummary:
        """
        Convert to the standard library's traceback.FrameSummary.

        The module name takes the place of the function name, and the column becomes the
        0-based colno. The source line is looked up through linecache.
        """
        return traceback.FrameSummary(
            self.file_path,
            self.line,
            self.file_id,
            end_lineno=self.line,
            colno=self.column - 1 if self.column else None,
        )

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


# Methods --------------------------------------------------------------------------------------------------------------

def caller_location(depth: int = 1) -> SourceLocation:
    """Capture the source location of a caller from the call stack.

    Called inside an assertion helper, the default depth returns the location where the
    helper itself was called, which is where the assertion was written. Use a larger depth
    when the helper is wrapped by another helper.

    Args:
        depth (int): `1` refers to the caller of the function that calls caller_location(),
            `2` to that caller's caller, and so on.

    Returns:
        SourceLocation: Module name, file name, line and column of that frame.

    Raises:
        IndexError: If the call stack is not deep enough for the given depth.
        TypeError: If `depth` is not an integer.
        ValueError: If `depth` is less than 1.

    Warning:
        This function depends on `inspect.stack()`, which is costly. Capture the location
        only when an assertion actually fails where possible.

    Examples:
        def assert_positive(value, location=None):
            if value > 0:
                return
            location = location or caller_location()
            ...

        assert_positive(-1)  # location points at this line
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise TypeError(f"stack depth must be an integer, but got {class_name(depth)}")
    if depth < 1:
        raise ValueError(f"stack depth must be 1 or greater, but got {describe(depth)}")

    # stack()[0] is caller_location itself, stack()[1] the helper that called it,
    # so the helper's caller sits at depth + 1.
    frames = stack(context=0)
    try:
        frame_info = frames[depth + 1]
        file_id = frame_info.frame.f_globals.get("__name__")
    except IndexError as e:
        raise IndexError(f"call stack is not deep enough to access frame at depth {describe(depth)}") from e
    finally:
        # Frame objects form reference cycles with this function's locals
        del frames

    if not isinstance(file_id, str):
        file_id = os.path.splitext(os.path.basename(frame_info.filename))[0]

    positions = frame_info.positions
    col_offset = positions.col_offset if positions is not None else None

    return SourceLocation(
        file_id=file_id,
        file_path=frame_info.filename,
        line=frame_info.lineno or 0,
        column=col_offset + 1 if col_offset is not None else 0,
    )
