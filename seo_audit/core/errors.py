from dataclasses import dataclass
from typing import Any, Optional


class FetchError(Exception):
    """Page could not be retrieved (network failure, bad status, timeout)."""


class AuditError(Exception):
    status_code = 500
    message = "Something went wrong while analyzing the site."

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        if message:
            self.message = message
        self.detail = detail
        super().__init__(detail or self.message)


class ValidationError(AuditError):
    status_code = 400
    message = "Please send a valid URL starting with http or https"


class PageUnreachableError(AuditError):
    status_code = 500


class ExplanationQuotaExceeded(AuditError):
    status_code = 429
    message = (
        "The AI provider quota has been exceeded or the request was rate limited. "
        "Please try again later or check the account's billing and usage limits."
    )


# ---------- per-provider call outcomes ----------
@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Degraded:
    reason: str
    value: Any = None   # substitute value the pipeline continues with


@dataclass(frozen=True)
class Fatal:
    error: AuditError
