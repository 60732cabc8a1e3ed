"""
Exceptions raised by logglysend.
"""


class LogglySendError(Exception):
    """
    Base exception for logglysend errors.

    Args:
        message: The error message.
    """

    def __init__(self, message: str = "An error occurred while shipping logs."):
        self.message = message
        super().__init__(self.message)


class SerializationError(LogglySendError):
    """
    A submitted message could not be encoded as JSON.

    The message is never buffered when this is raised.
    """

    def __init__(self, reason: str):
        super().__init__(f"Unable to serialize message: {reason}")


class TransportError(LogglySendError):
    """
    The bulk endpoint could not be reached.

    The batch that was being sent is dropped.

    Args:
        endpoint: URL the batch was posted to
        count: Number of messages in the dropped batch
        reason: Underlying network error
    """

    def __init__(self, endpoint: str, count: int, reason: str):
        self.endpoint = endpoint
        self.count = count
        super().__init__(
            f"Failed to send {count} messages to {endpoint}: {reason}"
        )
