#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from failkit.failing import FailSpy
from failkit.location import SourceLocation


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def fail_spy() -> FailSpy:
    """Fresh recording double for each test."""
    return FailSpy()


@pytest.fixture
def location() -> SourceLocation:
    """Location of a fictional assertion with a known source line."""
    return SourceLocation(file_id="tests.sample", file_path=__file__, line=2, column=3)
