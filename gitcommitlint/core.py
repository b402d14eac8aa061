"""Core functionality for git-commit-lint."""
import asyncio
import inspect
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from git import Repo

from .config import Config
from .models import CommitMessage, LintReport, RepositoryContext, RuleLevel, RuleOutcome, ValidationResult
from .observers import LintObserver
from .rules import HEADER_FORMAT, ISSUE_REFERENCE, IssueReferenceValidator, header_format
from .tracker import GitHubIssueChecker, IssueExistenceChecker

Rule = Callable[[CommitMessage], Union[ValidationResult, Awaitable[ValidationResult]]]


class CommitLinter:
    """Runs a set of named rules against commit messages.

    Each rule is registered with a severity level. Disabled rules are
    never called; failures of warning-level rules are reported but do
    not make a commit invalid.
    """

    def __init__(self):
        self._rules: Dict[str, Tuple[Rule, RuleLevel]] = {}
        self.observers: List[LintObserver] = []

    def register(self, name: str, rule: Rule, level: RuleLevel = RuleLevel.ERROR) -> None:
        """Register a rule under a name, replacing any previous one."""
        self._rules[name] = (rule, RuleLevel(level))

    @property
    def rule_names(self) -> List[str]:
        return list(self._rules)

    def add_observer(self, observer: LintObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: LintObserver) -> None:
        self.observers.remove(observer)

    async def _apply(self, rule: Rule, commit: CommitMessage) -> ValidationResult:
        result = rule(commit)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def lint(self, commit: CommitMessage, sha: Optional[str] = None) -> LintReport:
        """Run every enabled rule against one commit.

        Raises:
            TrackerTransportError: If a rule could not reach the issue tracker
        """
        report = LintReport(commit=commit, sha=sha)
        for name, (rule, level) in self._rules.items():
            if level == RuleLevel.DISABLED:
                continue
            result = await self._apply(rule, commit)
            report.outcomes.append(
                RuleOutcome(rule=name, level=level, valid=result.valid, message=result.message)
            )

        for observer in self.observers:
            await observer.on_commit_linted(report)

        return report

    async def lint_many(
        self, commits: Sequence[Tuple[Optional[str], CommitMessage]]
    ) -> List[LintReport]:
        """Lint several commits concurrently, keeping their order."""
        return list(await asyncio.gather(*(self.lint(commit, sha) for sha, commit in commits)))


def create_linter(
    config: Config,
    context: Optional[RepositoryContext] = None,
    checker: Optional[IssueExistenceChecker] = None,
    observers: Iterable[LintObserver] = (),
) -> CommitLinter:
    """Build a linter with the configured rules.

    The repository context is only needed when the issue-reference rule
    is enabled; it is then read from the environment unless given.

    Raises:
        ConfigurationError: If the issue-reference rule is enabled and the
            repository context is unavailable
    """
    observers = list(observers)
    linter = CommitLinter()
    for observer in observers:
        linter.add_observer(observer)

    linter.register(HEADER_FORMAT, header_format, config.level_of(HEADER_FORMAT))

    issue_level = config.level_of(ISSUE_REFERENCE)
    if issue_level != RuleLevel.DISABLED:
        context = context or RepositoryContext.from_env()
        if checker is None:
            checker = GitHubIssueChecker(context, api_url=config.api_url, timeout=config.timeout)
            for observer in observers:
                checker.add_observer(observer)
        linter.register(ISSUE_REFERENCE, IssueReferenceValidator(context, checker), issue_level)

    return linter


def read_commits(
    repo_path: str, rev_range: str, max_count: Optional[int] = None
) -> List[Tuple[str, CommitMessage]]:
    """Read commit messages from a repository, oldest first.

    Args:
        repo_path: Path to the git repository
        rev_range: Any revision or range git understands, e.g. "main..HEAD"
        max_count: Only read this many commits, newest first

    Returns:
        List of (sha, message) pairs
    """
    repo = Repo(repo_path)
    commits = list(repo.iter_commits(rev_range, max_count=max_count))
    commits.reverse()
    return [(commit.hexsha, CommitMessage.parse(commit.message)) for commit in commits]
