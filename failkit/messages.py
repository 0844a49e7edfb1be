#
# FailKit Failure Message Tools
#

# Local ----------------------------------------------------------------------------------------------------------------
from .describe import DescribeConf


# Methods --------------------------------------------------------------------------------------------------------------

def message_suffix(message: str | None = "") -> str:
    """
    Format an optional user message for appending to a failure description.

    Returns an empty string for an empty or missing message, otherwise the message
    preceded by " - ".

    Examples:
        >>> "Expected 1, but was 2" + message_suffix("")
        'Expected 1, but was 2'
        >>> "Expected 1, but was 2" + message_suffix("totals")
        'Expected 1, but was 2 - totals'
    """
    if not message:
        return ""
    return f"{DescribeConf.SUFFIX_SEPARATOR}{message}"
