"""GitHub webhook API errors."""

from __future__ import annotations

from stargaze.errors import StargazeError, preview_body


class GitHubAPIError(StargazeError):
    """Raised when GitHub returns an error response or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialise with a message and optional HTTP status code and body."""
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def http_error(cls, operation: str, status_code: int, body: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub API error while {operation}: {status_code} - {preview_body(body)}",
            status_code=status_code,
            body=body,
        )

    @classmethod
    def transport_error(cls, operation: str, detail: str) -> GitHubAPIError:
        """Return an error for requests that never produced a response."""
        return cls(f"GitHub API request failed while {operation}: {detail}")

    @classmethod
    def invalid_response(cls, operation: str, detail: str) -> GitHubAPIError:
        """Return an error for a 2xx response that does not decode."""
        return cls(
            f"GitHub API returned an unexpected payload while {operation}: {detail}"
        )
