#
# FailKit - Assertion Helper Tests
#
# assert_equal below is the kind of helper failkit is built for. The tests check the helper
# through FailSpy, then check that the production Fail reports the helper's call site.
#

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from failkit.describe import describe
from failkit.failing import Fail, Failing
from failkit.location import SourceLocation, caller_location
from failkit.messages import message_suffix


# Local Classes & Methods ----------------------------------------------------------------------------------------------

def assert_equal(
    actual: Any,
    expected: Any,
    message: str = "",
    *,
    location: SourceLocation | None = None,
    failure: Failing = Fail(),
) -> None:
    __tracebackhide__ = True
    if actual == expected:
        return
    failure.fail(
        f"Expected {describe(expected)}, but was {describe(actual)}" + message_suffix(message),
        location or caller_location(),
    )


class Money:
    def __init__(self, amount, currency):
        self.amount = amount
        self.currency = currency

    def __eq__(self, other):
        return isinstance(other, Money) and (self.amount, self.currency) == (other.amount, other.currency)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestAssertEqual:
    def test_equal(self, fail_spy):
        assert_equal(1, expected=1, failure=fail_spy)

        assert fail_spy.call_count == 0

    def test_mismatch(self, fail_spy):
        assert_equal(2, expected=1, failure=fail_spy)

        assert fail_spy.call_count == 1
        assert fail_spy.messages[0] == "Expected 1, but was 2"

    def test_mismatch_with_message(self, fail_spy):
        assert_equal(2, expected=1, message="message", failure=fail_spy)

        assert fail_spy.call_count == 1
        assert fail_spy.messages[0] == "Expected 1, but was 2 - message"

    @pytest.mark.parametrize(
        "actual, expected, message",
        [
            pytest.param("a\nb", "a b", 'Expected "a b", but was "a\\nb"', id="strings"),
            pytest.param(None, 0, "Expected 0, but was nil", id="none"),
            pytest.param(
                Money(5, "EUR"),
                Money(5, "USD"),
                'Expected Money(amount: 5, currency: "USD"), but was Money(amount: 5, currency: "EUR")',
                id="plain-object",
            ),
        ],
    )
    def test_mismatch_descriptions(self, fail_spy, actual, expected, message):
        assert_equal(actual, expected, failure=fail_spy)

        assert fail_spy.messages == (message,)

    def test_location_is_call_site(self, fail_spy):
        line = inspect.currentframe().f_lineno + 1
        assert_equal(2, expected=1, failure=fail_spy)

        location = fail_spy.locations[0]
        assert location.line == line
        assert location.file_path == __file__
        assert location.file_id == __name__

    def test_explicit_location(self, fail_spy, location):
        assert_equal(2, expected=1, location=location, failure=fail_spy)

        assert fail_spy.locations == (location,)

    def test_keeps_reporting(self, fail_spy):
        """Failures recorded by the spy do not stop the test."""
        assert_equal(2, expected=1, failure=fail_spy)
        assert_equal("b", expected="a", failure=fail_spy)
        assert_equal(3, expected=3, failure=fail_spy)

        assert fail_spy.call_count == 2
        assert fail_spy.messages == ("Expected 1, but was 2", 'Expected "a", but was "b"')
        assert fail_spy.locations[0].line + 1 == fail_spy.locations[1].line

    def test_default_failure_fails_test(self):
        line = inspect.currentframe().f_lineno + 2
        with pytest.raises(pytest.fail.Exception) as exc_info:
            assert_equal(2, expected=1, message="totals")

        report = str(exc_info.value)
        assert report.startswith("Expected 1, but was 2 - totals\n")
        assert f'File "{__file__}", line {line}, in {__name__}' in report
        assert 'assert_equal(2, expected=1, message="totals")' in report
