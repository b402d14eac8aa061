#!/usr/bin/env python3
import asyncio
from pathlib import Path
from typing import List, Optional

import click
from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from rich.console import Console
from rich.markup import escape

from .config import Config, DEFAULT_CONFIG_FILENAME
from .core import create_linter, read_commits
from .errors import CommitLintError
from .models import CommitMessage, LintReport
from .observers import ConsoleLogObserver, FileLogObserver

EXIT_OK = 0
EXIT_LINT_FAILED = 1
EXIT_INFRASTRUCTURE = 2

console = Console(soft_wrap=True)


def run_async(coro):
    """Run an async coroutine to completion."""
    return asyncio.run(coro)


def print_report(report: LintReport) -> None:
    """Print one commit's problems in commitlint's layout."""
    header = report.commit.header or "(empty message)"
    label = f"{report.sha[:12]} " if report.sha else ""
    console.print(f"⧗   input: {escape(label + header)}")

    for outcome in report.errors:
        console.print(f"[red]✖   {escape(outcome.message)} {escape(f'[{outcome.rule}]')}[/red]")
    for outcome in report.warnings:
        console.print(f"[yellow]⚠   {escape(outcome.message)} {escape(f'[{outcome.rule}]')}[/yellow]")

    errors, warnings = len(report.errors), len(report.warnings)
    summary = f"found {errors} problems, {warnings} warnings"
    if errors:
        console.print(f"[red]✖   {summary}[/red]\n")
    elif warnings:
        console.print(f"[yellow]⚠   {summary}[/yellow]\n")
    else:
        console.print(f"[green]✔   {summary}[/green]\n")


def print_config(config: Config, config_path: Path) -> None:
    source = "config" if config_path.exists() else "default"

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {config_path.as_posix()}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<28} {'Value':<28} {'Source':<10}")
    console.print("-" * 66)

    def print_setting(name: str, value, source: str):
        console.print(f"{name:<28} {str(value):<28} {source:<10}")

    print_setting("api_url", config.api_url, source)
    print_setting("timeout", config.timeout, source)
    print_setting("always_log", config.always_log, source)
    print_setting("log_file", config.log_file or "None", source)
    for rule, level in config.rules.items():
        print_setting(f"rules.{rule}", int(level), source)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


def collect_commits(
    repo_path: Path,
    edit_file: Optional[Path],
    message: Optional[str],
    from_ref: Optional[str],
    to_ref: str,
) -> List[tuple]:
    """Gather the commits to lint from whichever source was requested."""
    if edit_file is not None:
        raw = edit_file.read_text(encoding="utf-8")
        return [(None, CommitMessage.parse(raw, strip_comments=True))]
    if message is not None:
        return [(None, CommitMessage.parse(message))]
    if from_ref:
        return read_commits(str(repo_path), f"{from_ref}..{to_ref}")
    return read_commits(str(repo_path), to_ref, max_count=1)


@click.command()
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-e",
    "--edit",
    "edit_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Lint the commit message stored in this file (use from a commit-msg hook)",
)
@click.option("-m", "--message", help="Lint this commit message text")
@click.option(
    "--from",
    "from_ref",
    help="Lint every commit after this revision, up to --to",
)
@click.option(
    "--to",
    "to_ref",
    default="HEAD",
    show_default=True,
    help="Last revision to lint; alone, only this commit is linted",
)
@click.option("-v", "--verbose", is_flag=True, help="Show issue tracker lookups")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log lint activity (overrides config setting)",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--init-config",
    is_flag=True,
    help=f"Write a {DEFAULT_CONFIG_FILENAME} with default values",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.option("--check-updates", is_flag=True, help="Check for available updates")
@click.pass_context
def main(
    ctx: click.Context,
    path: Path,
    edit_file: Optional[Path],
    message: Optional[str],
    from_ref: Optional[str],
    to_ref: str,
    verbose: bool,
    log_file: Optional[Path],
    config_list: bool,
    init_config: bool,
    version: bool,
    check_updates: bool,
):
    """
    Lint commit messages for a conventional or issue-prefixed header and a
    body that cites a tracked issue.

    Numbered issues ("Issue #123") are looked up on GitHub using the
    GITHUB_REPOSITORY and GITHUB_TOKEN environment variables. "Issue #nil"
    states that no issue applies and skips the lookup.

    Exit status is 0 when every commit passes, 1 when any commit has an
    error-level problem and 2 when linting could not be completed.
    """
    sources = [edit_file is not None, message is not None, bool(from_ref)]
    if sum(sources) > 1:
        raise click.UsageError("Use only one of --edit, --message or --from")

    exit_code = EXIT_OK
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        if check_updates:
            from .version import check_updates_and_display

            check_updates_and_display()
            return

        repo_path = path.absolute()
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if config_list:
            print_config(Config.load(repo_path), config_path)
            return

        if init_config:
            if config_path.exists():
                console.print(f"[yellow]{config_path.as_posix()} already exists[/yellow]")
            else:
                Config().save(repo_path)
                console.print(f"[green]Created {config_path.as_posix()} with default values[/green]")
            return

        config = Config.load(repo_path)

        observers = []
        if verbose:
            from .version import get_version_summary

            console.print(f"[dim]{get_version_summary()}[/dim]")
            observers.append(ConsoleLogObserver(console))
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            observers.append(FileLogObserver(str(log_file_path)))

        linter = create_linter(config, observers=observers)
        commits = collect_commits(repo_path, edit_file, message, from_ref, to_ref)
        if not commits:
            console.print("[yellow]No commits to lint[/yellow]")
            return

        reports = run_async(linter.lint_many(commits))
        for report in reports:
            if report.errors or report.warnings:
                print_report(report)

        failed = [report for report in reports if not report.valid]
        if failed:
            exit_code = EXIT_LINT_FAILED
        elif verbose:
            console.print(f"[green]✔   {len(reports)} commit(s) passed[/green]")
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        exit_code = EXIT_INFRASTRUCTURE
    except (CommitLintError, GitCommandError, InvalidGitRepositoryError, NoSuchPathError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        exit_code = EXIT_INFRASTRUCTURE
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()

    ctx.exit(exit_code)


if __name__ == "__main__":
    main()
