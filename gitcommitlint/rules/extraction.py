"""Issue reference extraction.

References are looked up by an ordered list of matchers. The first matcher
that finds something wins, so the header always takes precedence over the
body.
"""
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models import IssueLocation, IssueReference

HEADER_ISSUE = re.compile(r"^Issue #(\d+):", re.ASCII)
BODY_ISSUE = re.compile(r"Issue #(\d+|nil)", re.ASCII)


class IssueMatcher(ABC):
    """Looks for an issue reference in one part of a commit message."""

    location: IssueLocation

    def __init__(self, pattern: "re.Pattern[str]"):
        self.pattern = pattern

    @abstractmethod
    def text(self, header: str, body: Optional[str]) -> Optional[str]:
        """Return the part of the message this matcher inspects."""
        pass

    def match(self, header: str, body: Optional[str]) -> Optional[IssueReference]:
        text = self.text(header, body)
        if not text:
            return None
        found = self.pattern.search(text)
        if not found:
            return None
        return IssueReference(location=self.location, id=found.group(1))


class HeaderIssueMatcher(IssueMatcher):
    location = IssueLocation.HEADER

    def __init__(self, pattern: "re.Pattern[str]" = HEADER_ISSUE):
        super().__init__(pattern)

    def text(self, header: str, body: Optional[str]) -> Optional[str]:
        return header


class BodyIssueMatcher(IssueMatcher):
    location = IssueLocation.BODY

    def __init__(self, pattern: "re.Pattern[str]" = BODY_ISSUE):
        super().__init__(pattern)

    def text(self, header: str, body: Optional[str]) -> Optional[str]:
        return body


class IssueReferenceExtractor:
    """Finds the issue a commit message refers to."""

    def __init__(self, matchers: Optional[Sequence[IssueMatcher]] = None):
        self.matchers = list(matchers) if matchers is not None else [
            HeaderIssueMatcher(),
            BodyIssueMatcher(),
        ]

    def extract(self, header: str, body: Optional[str]) -> Optional[IssueReference]:
        """Return the first reference found, or None when there is none.

        None is distinct from a reference whose id is "nil": the latter is
        an explicit statement that no tracked issue applies.
        """
        for matcher in self.matchers:
            reference = matcher.match(header, body)
            if reference is not None:
                return reference
        return None
