"""
Exception taxonomy for the audit pipeline.

NetworkError and ApiError come out of the transport. ParseError and
ValidationError are raised by the update stage and always caught per item.
AbortException stops the whole run.
"""

from typing import Optional


class AuditError(Exception):
    """Base class for audit failures."""
    pass


class NetworkError(AuditError):
    """Raised on a non-2xx HTTP status or a failed request."""

    def __init__(self, status_code: Optional[int], message: str = ""):
        self.status_code = status_code
        self.message = message
        if status_code is None:
            super().__init__(f"Request failed: {message}")
        else:
            super().__init__(f"HTTP error {status_code}: {message}")


class ApiError(AuditError):
    """Raised when a GraphQL response carries an errors array."""

    def __init__(self, errors: list):
        self.errors = errors
        messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
        super().__init__(f"GraphQL errors: {'; '.join(messages)}")


class ParseError(AuditError):
    """Raised when a weight string is not '<number> <unit>'."""
    pass


class ValidationError(AuditError):
    """Raised when a mutation returns userErrors."""

    def __init__(self, user_errors: list):
        self.user_errors = user_errors
        pairs = []
        for err in user_errors:
            field = err.get("field")
            if isinstance(field, list):
                field = ".".join(str(f) for f in field)
            pairs.append(f"{field}: {err.get('message', '')}")
        super().__init__(", ".join(pairs))


class AbortException(Exception):
    """Raised when execution must abort."""
    pass
