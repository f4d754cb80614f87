"""Request ID utility functions."""

import uuid


def get_suid() -> str:
    """
    Generate a unique request ID using UUID4.

    Used for asynchronous summarization requests when the caller does not
    supply its own ID.

    Returns:
        str: A canonical RFC 4122 UUID4 string.
    """
    return str(uuid.uuid4())
