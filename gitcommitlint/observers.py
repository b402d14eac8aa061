"""Observer pattern for lint diagnostics."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import LintReport


class LintObserver(ABC):
    """Abstract base class for lint observers."""

    @abstractmethod
    async def on_issue_lookup(
        self, repository: str, issue_id: str, status_code: int
    ) -> None:
        """Called after the issue tracker answered a lookup."""
        pass

    @abstractmethod
    async def on_commit_linted(self, report: LintReport) -> None:
        """Called when every rule has run for a commit."""
        pass


class ConsoleLogObserver(LintObserver):
    """Observer that logs lint activity to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_issue_lookup(
        self, repository: str, issue_id: str, status_code: int
    ) -> None:
        self.console.print(
            f"[dim]GET {repository} issue #{issue_id} -> {status_code}[/dim]"
        )

    async def on_commit_linted(self, report: LintReport) -> None:
        status = "passed" if report.valid else "failed"
        self.console.print(f"[dim]Linted '{escape(report.commit.header)}': {status}[/dim]")


class FileLogObserver(LintObserver):
    """Observer that logs lint activity to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_issue_lookup(
        self, repository: str, issue_id: str, status_code: int
    ) -> None:
        await self._log(f"Issue lookup {repository}#{issue_id} returned {status_code}")

    async def on_commit_linted(self, report: LintReport) -> None:
        status = "Passed" if report.valid else "Failed"
        line = f"{status} lint of '{report.commit.header}'"
        if report.sha:
            line += f" ({report.sha[:12]})"
        for outcome in report.outcomes:
            if not outcome.valid:
                line += f"\n    [{outcome.rule}] {outcome.message}"
        await self._log(line)
