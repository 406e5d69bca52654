from __future__ import annotations

from enum import StrEnum
from typing import Any


class TaggingErrorKind(StrEnum):
    UNSPECIFIED_INPUT = "unspecified_input"
    INVALID_BODY = "invalid_body"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    MISSING_SCHEMA = "missing_schema"
    CONFIGURATION_ERROR = "configuration_error"
    TRANSPORT_ERROR = "transport_error"
    UPSTREAM_ERROR = "upstream_error"
    NO_MESSAGE = "no_message"
    EMPTY_CONTENT = "empty_content"
    UNPARSEABLE_CONTENT = "unparseable_content"


class TaggingError(Exception):
    """Raised at any stage of the tagging pipeline.

    `status_code` is the most specific HTTP status known for the failure (None means 500).
    `details` is an optional diagnostic payload returned to the caller as-is.
    """

    def __init__(
        self,
        kind: TaggingErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def http_status(self) -> int:
        return self.status_code or 500
