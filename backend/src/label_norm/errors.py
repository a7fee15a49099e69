"""Exception types raised by label-norm."""


class LabelNormError(Exception):
    """Base class for label-norm failures."""


class UnmappedLabelError(LabelNormError, KeyError):
    """An issue carries a label the canonicalization mapping never saw.

    Means the mapping was built from an incomplete label population. Never
    skipped silently.
    """

    def __init__(self, label: str, issue_id: str | None = None):
        self.label = label
        self.issue_id = issue_id
        where = f" on issue {issue_id}" if issue_id else ""
        super().__init__(f"label {label!r}{where} is missing from the canonical mapping")

    def __str__(self) -> str:
        return self.args[0]


class CredentialsError(LabelNormError):
    """The auth file is missing, unreadable or malformed."""


class JiraError(LabelNormError):
    """Jira answered with an error (or could not be reached)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after  # seconds, from a 429 Retry-After header
