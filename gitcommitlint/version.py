"""Version management for git-commit-lint."""

import asyncio
import importlib.metadata
from pathlib import Path
from typing import Optional, Tuple

import httpx
from packaging import version
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import __version__

PYPI_URL = "https://pypi.org/pypi/gitcommitlint/json"

console = Console()


def get_current_version() -> str:
    """Get the current version of git-commit-lint."""
    return __version__


def get_installed_version() -> str:
    """Get the installed version from pip metadata."""
    try:
        return importlib.metadata.version("gitcommitlint")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_installation_path() -> Path:
    return Path(__file__).parent


async def fetch_latest_version(client: Optional[httpx.AsyncClient] = None) -> Optional[str]:
    """Ask PyPI for the newest released version."""
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await fetch_latest_version(own_client)
    response = await client.get(PYPI_URL, timeout=10.0)
    if response.status_code == 200:
        return response.json().get("info", {}).get("version")
    return None


def check_for_updates() -> Tuple[bool, Optional[str]]:
    """Check if there's a newer version available on PyPI."""
    current_version = get_current_version()
    try:
        latest_version = asyncio.run(fetch_latest_version())
    except httpx.HTTPError as e:
        console.print(f"[yellow]Warning: Could not fetch latest version: {e}[/yellow]")
        return False, None

    if not latest_version:
        return False, current_version
    try:
        if version.parse(latest_version) > version.parse(current_version):
            return True, latest_version
    except version.InvalidVersion as e:
        console.print(f"[yellow]Warning: Could not compare versions: {e}[/yellow]")
    return False, current_version


def display_version_info() -> None:
    """Display comprehensive version information."""
    current_version = get_current_version()
    installed_version = get_installed_version()

    version_text = Text()
    version_text.append("git-commit-lint\n", style="bold blue")
    version_text.append(f"Current version: {current_version}\n", style="green")
    version_text.append(f"Installed version: {installed_version}\n", style="cyan")
    version_text.append(f"Installation path: {get_installation_path()}\n", style="yellow")

    if current_version != installed_version:
        version_text.append("\nVersion mismatch detected!\n", style="red")
        version_text.append("Consider reinstalling: pip install -e .\n", style="yellow")

    console.print(Panel(version_text, title="Version Information", border_style="blue"))


def check_updates_and_display() -> None:
    """Check for updates and display results."""
    console.print("Checking for updates...")

    has_updates, latest_version = check_for_updates()
    current_version = get_current_version()

    if has_updates and latest_version:
        console.print(f"[green]New version available: {latest_version}[/green]")
        console.print(f"[yellow]Current version: {current_version}[/yellow]")
        console.print("\nTo update, run:")
        console.print("[cyan]pip install --upgrade gitcommitlint[/cyan]")
    else:
        console.print(f"[green]You're running the latest version: {current_version}[/green]")


def get_version_summary() -> str:
    """Get a brief version summary for CLI output."""
    current_version = get_current_version()
    installed_version = get_installed_version()

    if current_version == installed_version:
        return f"git-commit-lint {current_version}"
    return f"git-commit-lint {current_version} (installed: {installed_version})"
