"""Tests for lint observers."""
from unittest.mock import Mock

import pytest
from rich.console import Console

from gitcommitlint.models import CommitMessage, LintReport, RuleLevel, RuleOutcome
from gitcommitlint.observers import ConsoleLogObserver, FileLogObserver


def failing_report() -> LintReport:
    return LintReport(
        commit=CommitMessage(header="random text", body="Issue #nil"),
        sha="0123456789abcdef",
        outcomes=[
            RuleOutcome(rule="header-format", level=RuleLevel.ERROR, valid=False, message="bad header"),
        ],
    )


@pytest.mark.asyncio
async def test_console_observer():
    console = Mock(spec=Console)
    observer = ConsoleLogObserver(console)

    await observer.on_issue_lookup("octo/widgets", "42", 404)
    await observer.on_commit_linted(failing_report())

    printed = [call.args[0] for call in console.print.call_args_list]
    assert "octo/widgets issue #42 -> 404" in printed[0]
    assert "failed" in printed[1]


@pytest.mark.asyncio
async def test_file_observer(tmp_path):
    log_file = tmp_path / "logs" / "lint.log"
    observer = FileLogObserver(str(log_file))

    await observer.on_issue_lookup("octo/widgets", "42", 200)
    await observer.on_commit_linted(failing_report())

    content = log_file.read_text()
    assert "Issue lookup octo/widgets#42 returned 200" in content
    assert "Failed lint of 'random text' (0123456789ab)" in content
    assert "[header-format] bad header" in content
