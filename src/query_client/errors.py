"""Errors raised while resolving templates and executing queries."""

from typing import Any, Optional, Sequence

from gql.transport.exceptions import TransportProtocolError, TransportServerError


class QueryClientError(Exception):
    """Base class for every failure surfaced by the query client."""

    kind: str = "unknown"


class TemplateNotFound(QueryClientError):
    """Exception raised when no template exists for an operation."""

    kind = "template"

    def __init__(self, operation_name: str, location: Optional[str] = None):
        message = f"No query template for operation: {operation_name}"
        if location:
            message += f" (looked in {location})"
        super().__init__(message)
        self.operation_name = operation_name
        self.location = location


class UnexpectedStatus(QueryClientError, TransportServerError):
    """Exception raised when the backend answers with anything but 200."""

    kind = "transport"

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"Response status != 200, actual: {status}", status)
        self.status = status
        self.body = body


class MalformedResponse(QueryClientError, TransportProtocolError):
    """Exception raised when the body does not decode into the expected shape."""

    kind = "decode"

    def __init__(self, context: str, body: Any = None):
        super().__init__(f"Malformed response: {context}")
        self.context = context
        self.body = body


class MissingPayload(QueryClientError):
    """Exception raised when the expected nested field is absent or null."""

    kind = "missing_payload"

    def __init__(
        self, path: Sequence[str], errors: Optional[list[Any]] = None
    ):
        dotted = ".".join(["data", *path])
        message = f"Null payload at {dotted}"
        if errors:
            messages = [
                e.get("message") if isinstance(e, dict) else e for e in errors
            ]
            message += f", backend errors: {messages}"
        super().__init__(message)
        self.path = tuple(path)
        self.errors = list(errors or [])
