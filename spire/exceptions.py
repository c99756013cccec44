"""Spire client exceptions."""


class SpireError(Exception):
    """Base exception for Spire client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConnectionError(SpireError):
    """Failed to reach the Spire server (refused, timed out, DNS)."""

    pass


class SerializationError(SpireError):
    """A payload could not be encoded or a response could not be decoded."""

    pass


class APIError(SpireError):
    """The Spire server answered with a non-success status.

    Attributes:
        status: Status line, e.g. "401 Unauthorized".
        status_code: Numeric HTTP status.
        detail: Raw response body, or a description of why it could not be read.
    """

    def __init__(self, status: str, detail: str, status_code: int | None = None):
        super().__init__(
            f"API request failed with status {status}. Details: {detail}"
        )
        self.status = status
        self.status_code = status_code
        self.detail = detail


class OrderDeletionError(SpireError):
    """Deleting a sales order failed; later orders were not attempted."""

    def __init__(self, order_id: str | int, message: str):
        super().__init__(f"Failed to delete sales order {order_id}: {message}")
        self.order_id = order_id
