"""
GitHub API client for check runs and pull request comments.
"""

from typing import Any

import httpx
from hosting_deploy.core.logging import get_logger
from hosting_deploy.core.exceptions import GitHubAPIError

logger = get_logger(__name__)


class GitHubClient:
    """Client for the GitHub REST endpoints the action reports to."""

    PER_PAGE = 100

    def __init__(self, token: str, repo: str, base_url: str = "https://api.github.com", timeout: float = 30.0):
        if not repo:
            raise GitHubAPIError("GITHUB_REPOSITORY is not set")
        self._token = token
        self._repo = repo
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @property
    def repo_url(self) -> str:
        return f"{self._base_url}/repos/{self._repo}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.repo_url}{path}"

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.request(method, url, headers=self._headers, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error("GitHub API error %s on %s %s: %s", e.response.status_code, method, path, e.response.text)
                raise GitHubAPIError(f"GitHub API {method} {path} failed: {e.response.status_code}") from e
            except httpx.HTTPError as e:
                raise GitHubAPIError(f"GitHub API {method} {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"GitHub API {method} {path} returned invalid JSON: {e}") from e

    async def create_check_run(self, head_sha: str, name: str) -> int:
        """
        Start an in-progress check run on a commit.

        Returns:
            The check run id

        Raises:
            GitHubAPIError: If API call fails
        """
        data = await self._request(
            "POST",
            "/check-runs",
            json={"name": name, "head_sha": head_sha, "status": "in_progress"},
        )
        return data["id"]

    async def update_check_run(self, check_run_id: int, fields: dict[str, Any]) -> None:
        """
        Update a check run, e.g. to complete it with a conclusion.

        Raises:
            GitHubAPIError: If API call fails
        """
        await self._request("PATCH", f"/check-runs/{check_run_id}", json=fields)

    async def list_comments(self, issue_number: int) -> list[dict[str, Any]]:
        """
        Get every comment on an issue or pull request.

        Raises:
            GitHubAPIError: If API call fails
        """
        comments: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = await self._request(
                "GET",
                f"/issues/{issue_number}/comments",
                params={"per_page": self.PER_PAGE, "page": page},
            )
            comments.extend(batch)
            if len(batch) < self.PER_PAGE:
                return comments
            page += 1

    async def create_comment(self, issue_number: int, body: str) -> dict[str, Any]:
        """
        Add a comment to an issue or pull request.

        Raises:
            GitHubAPIError: If API call fails
        """
        return await self._request("POST", f"/issues/{issue_number}/comments", json={"body": body})

    async def update_comment(self, comment_id: int, body: str) -> dict[str, Any]:
        """
        Replace the body of an existing comment.

        Raises:
            GitHubAPIError: If API call fails
        """
        return await self._request("PATCH", f"/issues/comments/{comment_id}", json={"body": body})
