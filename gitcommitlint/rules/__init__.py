"""Commit message rules.

Every rule takes a CommitMessage and returns a ValidationResult, either
directly or as an awaitable.
"""

from .extraction import (
    BodyIssueMatcher,
    HeaderIssueMatcher,
    IssueMatcher,
    IssueReferenceExtractor,
)
from .header import HeaderFormatValidator, header_format
from .issue import IssueReferenceValidator

HEADER_FORMAT = "header-format"
ISSUE_REFERENCE = "issue-reference"

__all__ = [
    'HEADER_FORMAT',
    'ISSUE_REFERENCE',
    'BodyIssueMatcher',
    'HeaderIssueMatcher',
    'IssueMatcher',
    'IssueReferenceExtractor',
    'HeaderFormatValidator',
    'header_format',
    'IssueReferenceValidator',
]
