"""Exceptions raised by git-commit-lint.

Pattern violations are never raised; rules report them as failing
ValidationResults. Exceptions are reserved for problems that make a
verdict impossible.
"""
from typing import Optional


class CommitLintError(Exception):
    """Base class for all git-commit-lint errors."""


class ConfigurationError(CommitLintError):
    """Raised when required settings are missing or malformed."""


class TrackerTransportError(CommitLintError):
    """Raised when the issue tracker could not be reached at all.

    A tracker that answers with a non-success status is not a transport
    failure; the issue is then reported as missing.
    """

    def __init__(self, issue_id: str, repository: str, reason: Optional[str] = None):
        self.issue_id = issue_id
        self.repository = repository
        self.reason = reason
        message = f"Could not reach issue tracker for {repository} issue #{issue_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
