"""Issue existence checks against the GitHub REST API."""
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from .errors import TrackerTransportError
from .models import RepositoryContext
from .observers import LintObserver

DEFAULT_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


class IssueExistenceChecker(ABC):
    """Answers whether an issue number exists in a repository."""

    @abstractmethod
    async def exists(self, repository: str, issue_id: str) -> bool:
        """Return True if the issue exists.

        Raises:
            TrackerTransportError: If the tracker could not be reached
        """
        pass


class GitHubIssueChecker(IssueExistenceChecker):
    """Checks issues with a single authenticated GET per lookup.

    Redirects are followed, so an issue moved to another repository still
    exists. Any final 2xx answer means the issue exists. Every other
    status, including 401/403, 404, 429 and 5xx, means it does not; the
    status itself is only passed on to observers.
    """

    def __init__(
        self,
        context: RepositoryContext,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.context = context
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.client = client
        self.observers: List[LintObserver] = []

    def add_observer(self, observer: LintObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: LintObserver) -> None:
        self.observers.remove(observer)

    def issue_url(self, repository: str, issue_id: str) -> str:
        return f"{self.api_url}/repos/{repository}/issues/{issue_id}"

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"token {self.context.token}",
            "Accept": GITHUB_ACCEPT,
        }

    async def _get(self, url: str) -> httpx.Response:
        # Moved issues and renamed repositories answer 301
        if self.client is not None:
            return await self.client.get(
                url, headers=self.headers, timeout=self.timeout, follow_redirects=True
            )
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await client.get(url, headers=self.headers, timeout=self.timeout)

    async def exists(self, repository: str, issue_id: str) -> bool:
        try:
            response = await self._get(self.issue_url(repository, issue_id))
        except httpx.TransportError as e:
            raise TrackerTransportError(issue_id, repository, str(e) or type(e).__name__) from e

        for observer in self.observers:
            await observer.on_issue_lookup(repository, issue_id, response.status_code)

        return response.is_success
