"""Custom exception classes for the SpecForge API."""


class SpecForgeError(Exception):
    """Base exception for SpecForge."""

    def __init__(
        self,
        code: str,
        message: str,
        details=None,
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        self.headers = headers or {}
        super().__init__(message)


class InvalidRequestError(SpecForgeError):
    """Missing, malformed, or too-short input. The caller must correct it."""

    def __init__(self, message: str, details=None):
        super().__init__("INVALID_REQUEST", message, details, status_code=400)


class AdmissionDeniedError(SpecForgeError):
    """Caller exceeded its request budget for the current window."""

    def __init__(self, retry_after: int, message: str = "Too many requests"):
        self.retry_after = retry_after
        super().__init__(
            "RATE_LIMITED",
            message,
            {"retry_after": retry_after},
            status_code=429,
            headers={"Retry-After": str(retry_after), "X-RateLimit-Remaining": "0"},
        )


class UpstreamEmptyError(SpecForgeError):
    """The generator returned no content."""

    def __init__(self, message: str = "No content in model response"):
        super().__init__("UPSTREAM_EMPTY", message, status_code=502)


class UpstreamMalformedError(SpecForgeError):
    """The generator output could not be parsed as JSON."""

    def __init__(self, raw: str, message: str = "Invalid JSON from model"):
        self.raw = raw
        super().__init__("UPSTREAM_MALFORMED", message, status_code=502)


class SchemaViolationError(SpecForgeError):
    """A parsed document failed the schema contract."""

    def __init__(self, violations, message: str = "Schema validation failed", status_code: int = 502):
        self.violations = list(violations)
        detail = "; ".join(str(v) for v in self.violations)
        super().__init__("SCHEMA_VIOLATION", message, detail, status_code=status_code)


class UpstreamTimeoutError(SpecForgeError):
    """The generator did not answer before the deadline."""

    def __init__(self, timeout: float):
        super().__init__(
            "UPSTREAM_TIMEOUT",
            f"Model did not respond within {timeout:g} seconds",
            {"timeout_seconds": timeout},
            status_code=504,
        )


class UnexpectedError(SpecForgeError):
    """Any failure not covered by the taxonomy above."""

    def __init__(self, message: str):
        super().__init__("INTERNAL_ERROR", message or "Unexpected error", status_code=500)


class NotFoundError(SpecForgeError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )
