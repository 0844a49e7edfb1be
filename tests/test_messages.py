#
# FailKit - Messages Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from failkit.messages import message_suffix


# Tests ----------------------------------------------------------------------------------------------------------------

class TestMessageSuffix:
    def test_empty_message(self):
        assert message_suffix("") == ""

    def test_none_message(self):
        assert message_suffix(None) == ""

    def test_default(self):
        assert message_suffix() == ""

    @pytest.mark.parametrize(
        "message, expected",
        [
            pytest.param("message", " - message", id="word"),
            pytest.param(" ", " -  ", id="space"),
            pytest.param("a - b", " - a - b", id="contains-separator"),
            pytest.param("line\nbreak", " - line\nbreak", id="newline-not-escaped"),
        ],
    )
    def test_adds_separator(self, message, expected):
        """Prefix non-empty messages with the separator, leaving them untouched."""
        assert message_suffix(message) == expected
