"""Relay API errors."""

from __future__ import annotations

from stargaze.errors import StargazeError, preview_body


class RelayAPIError(StargazeError):
    """Raised when a relay API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialise with a message, HTTP status and response body."""
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def http_error(cls, resource: str, status_code: int, body: str) -> RelayAPIError:
        """Return an error for non-2xx relay responses."""
        return cls(
            f"Relay API error for {resource}: {status_code} - {preview_body(body)}",
            status_code=status_code,
            body=body,
        )

    @classmethod
    def transport_error(cls, resource: str, detail: str) -> RelayAPIError:
        """Return an error for DNS, connection, TLS or timeout failures."""
        return cls(f"Relay API request for {resource} failed: {detail}")

    @classmethod
    def invalid_response(cls, resource: str, detail: str) -> RelayAPIError:
        """Return an error for a 2xx response that does not decode."""
        return cls(f"Relay API returned an unexpected {resource} payload: {detail}")
