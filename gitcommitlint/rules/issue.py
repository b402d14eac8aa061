"""Issue reference rule."""
from typing import Optional

from ..models import CommitMessage, IssueLocation, RepositoryContext, ValidationResult
from ..tracker import IssueExistenceChecker
from .extraction import IssueReferenceExtractor

BODY_REQUIRED_MESSAGE = "Commit body is required"
MISSING_REFERENCE_MESSAGE = (
    'Body must contain "Issue #nil" or "Issue #xxx" (with a valid issue number)'
)


def header_mismatch_message(issue_id: str) -> str:
    return (
        f'Body must contain "Issue #{issue_id}" '
        f"when header references Issue #{issue_id}"
    )


def missing_issue_message(issue_id: str) -> str:
    return f"Issue #{issue_id} does not exist in the repository"


class IssueReferenceValidator:
    """Requires every commit body to cite a tracked issue or 'Issue #nil'.

    When the header names an issue ("Issue #12: ..."), the body has to
    restate it verbatim so header and body cannot point at different
    issues. Numbered issues are confirmed with the existence checker;
    transport failures from the checker propagate to the caller.
    """

    def __init__(
        self,
        context: RepositoryContext,
        checker: IssueExistenceChecker,
        extractor: Optional[IssueReferenceExtractor] = None,
    ):
        self.context = context
        self.checker = checker
        self.extractor = extractor or IssueReferenceExtractor()

    async def _check_exists(self, issue_id: str) -> ValidationResult:
        if await self.checker.exists(self.context.repository, issue_id):
            return ValidationResult.ok()
        return ValidationResult.fail(missing_issue_message(issue_id))

    async def validate(self, commit: CommitMessage) -> ValidationResult:
        if not commit.body:
            return ValidationResult.fail(BODY_REQUIRED_MESSAGE)

        reference = self.extractor.extract(commit.header, commit.body)

        if reference is not None and reference.location == IssueLocation.HEADER:
            expected = f"Issue #{reference.id}"
            if expected not in commit.body:
                return ValidationResult.fail(header_mismatch_message(reference.id))
            return await self._check_exists(reference.id)

        if reference is None:
            return ValidationResult.fail(MISSING_REFERENCE_MESSAGE)
        if reference.is_nil:
            return ValidationResult.ok()
        return await self._check_exists(reference.id)

    async def __call__(self, commit: CommitMessage) -> ValidationResult:
        return await self.validate(commit)
