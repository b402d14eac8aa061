"""Shared models for git-commit-lint."""
import os
import re
from enum import Enum, IntEnum
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ConfigurationError

NIL_ISSUE = "nil"
REPOSITORY_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")


class IssueLocation(str, Enum):
    HEADER = "header"
    BODY = "body"


class RuleLevel(IntEnum):
    """Severity of a rule, using commitlint's numbering."""

    DISABLED = 0
    WARNING = 1
    ERROR = 2


class CommitMessage(BaseModel):
    """A commit message split into header and body.

    The header is the first line. The body is everything after it, or
    None when the message has no body.
    """

    model_config = ConfigDict(frozen=True)

    header: str
    body: Optional[str] = None

    @classmethod
    def parse(cls, raw: str, strip_comments: bool = False) -> "CommitMessage":
        """Build a CommitMessage from raw message text.

        Args:
            raw: The full commit message
            strip_comments: Drop lines starting with '#', as git does when
                cleaning up a message written in an editor

        Returns:
            CommitMessage: The parsed message
        """
        lines = raw.replace("\r\n", "\n").split("\n")
        if strip_comments:
            lines = [line for line in lines if not line.startswith("#")]

        while lines and not lines[0].strip():
            lines.pop(0)
        if not lines:
            return cls(header="", body=None)

        header = lines[0].rstrip()
        body = "\n".join(lines[1:]).strip("\n").rstrip()
        return cls(header=header, body=body or None)


class IssueReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: IssueLocation
    id: str = Field(description="Decimal issue number or the sentinel 'nil'")

    @property
    def is_nil(self) -> bool:
        return self.id == NIL_ISSUE


class ValidationResult(BaseModel):
    """Outcome of a single rule applied to a single commit."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: Optional[str] = None

    @model_validator(mode="after")
    def _require_message_on_failure(self) -> "ValidationResult":
        if not self.valid and not self.message:
            raise ValueError("A failing validation result needs a message")
        return self

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)

    def as_tuple(self) -> Tuple[bool, Optional[str]]:
        """Return the (passed, message) pair that lint hosts expect."""
        return self.valid, self.message


class RepositoryContext(BaseModel):
    """Repository identifier and tracker credential for the current process."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(description="Repository in owner/repo form")
    token: str = Field(repr=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RepositoryContext":
        """Read GITHUB_REPOSITORY and GITHUB_TOKEN from the environment.

        Raises:
            ConfigurationError: If either variable is missing or the
                repository is not in owner/repo form
        """
        environ = os.environ if environ is None else environ
        repository = environ.get("GITHUB_REPOSITORY", "").strip()
        token = environ.get("GITHUB_TOKEN", "").strip()

        if not repository:
            raise ConfigurationError("GITHUB_REPOSITORY is not set")
        if not REPOSITORY_PATTERN.match(repository):
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like owner/repo, got '{repository}'"
            )
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is not set")
        return cls(repository=repository, token=token)


class RuleOutcome(BaseModel):
    rule: str
    level: RuleLevel
    valid: bool
    message: Optional[str] = None


class LintReport(BaseModel):
    """All rule outcomes for one commit."""

    commit: CommitMessage
    sha: Optional[str] = None
    outcomes: List[RuleOutcome] = Field(default_factory=list)

    @property
    def errors(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if not o.valid and o.level == RuleLevel.ERROR]

    @property
    def warnings(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if not o.valid and o.level == RuleLevel.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors
