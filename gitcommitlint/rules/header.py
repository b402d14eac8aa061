"""Header format rule."""
import re

from ..models import CommitMessage, ValidationResult

CONVENTIONAL_TYPES = (
    "build", "chore", "ci", "docs", "feat", "fix",
    "perf", "refactor", "revert", "style", "test",
)

CONVENTIONAL_HEADER = re.compile(
    r"^(" + "|".join(CONVENTIONAL_TYPES) + r")(\(.*\))?: .+", re.ASCII
)
ISSUE_HEADER = re.compile(r"^Issue #\d+: .+", re.ASCII)

HEADER_FORMAT_MESSAGE = (
    'Header must start with a conventional type (e.g., "fix: ") or "Issue #123: "'
)


class HeaderFormatValidator:
    """Accepts conventional-commit headers and issue-prefixed headers."""

    patterns = (CONVENTIONAL_HEADER, ISSUE_HEADER)

    def validate(self, header: str) -> ValidationResult:
        if any(pattern.match(header) for pattern in self.patterns):
            return ValidationResult.ok()
        return ValidationResult.fail(HEADER_FORMAT_MESSAGE)


_validator = HeaderFormatValidator()


def header_format(commit: CommitMessage) -> ValidationResult:
    """Rule entry point; the body is never consulted."""
    return _validator.validate(commit.header)
