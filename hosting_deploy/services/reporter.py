"""
Reports deploy results to the commit check, the pull request and the log.
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Awaitable, Callable

from hosting_deploy.core.logging import get_logger
from hosting_deploy.models.check import CheckDetails
from hosting_deploy.services.github.client import GitHubClient

logger = get_logger(__name__)

CHECK_NAME = "Deploy Preview"

# Hidden marker identifying the comment this action owns on a PR
COMMENT_MARKER = "<!-- hosting-deploy-action:preview -->"

Finish = Callable[[CheckDetails], Awaitable[None]]


def prepare_url_markdown_list(urls: list[str], url_path: str = "") -> str:
    """Render deployed urls as one link, or as a bulleted list of links."""
    links = [f"[{url}]({url}{url_path})" for url in urls]
    if len(links) == 1:
        return links[0]
    return "\n".join(f"- {link}" for link in links)


def production_url(project_id: str) -> str:
    return f"https://{project_id}.web.app/"


def production_summary(project_id: str) -> str:
    return f"[{project_id}.web.app]({production_url(project_id)})"


def format_expire_time(expire_time: str) -> str:
    """
    Format an ISO timestamp as an RFC 1123 UTC date,
    e.g. "Tue, 20 Oct 2026 12:00:00 GMT".

    The CLI reports nanoseconds, which datetime cannot hold, so the
    fraction is cut to microseconds first. Unparseable values are returned
    unchanged.
    """
    normalized = re.sub(r"(\.\d{6})\d+", r"\1", expire_time.strip())
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        logger.warning("Could not parse expire time %r", expire_time)
        return expire_time

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return format_datetime(parsed.astimezone(timezone.utc).replace(microsecond=0), usegmt=True)


def build_preview_comment(urls_markdown: str, short_sha: str, expire_time: str) -> str:
    """Body of the pull request comment for a preview deploy."""
    return (
        f"Visit the preview URL for this PR (updated for commit {short_sha}):\n"
        f"\n"
        f"{urls_markdown}\n"
        f"\n"
        f"<sub>(expires {format_expire_time(expire_time)})</sub>"
    )


async def log_finish(details: CheckDetails) -> None:
    """Finish callback for runs without a check run."""
    logger.info("Deploy finished: %s", details.to_dict())


async def create_check(client: GitHubClient, head_sha: str) -> Finish:
    """
    Start the "Deploy Preview" check run on a commit.

    Returns:
        A coroutine function that completes the check run with a conclusion

    Raises:
        GitHubAPIError: If the check run cannot be created
    """
    check_run_id = await client.create_check_run(head_sha, CHECK_NAME)
    logger.info("Created check run %s for %s", check_run_id, head_sha)

    async def finish(details: CheckDetails) -> None:
        fields = details.to_dict()
        fields["status"] = "completed"
        fields["completed_at"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        await client.update_check_run(check_run_id, fields)

    return finish


def is_action_comment(comment: dict) -> bool:
    return COMMENT_MARKER in (comment.get("body") or "")


async def post_or_update_comment(client: GitHubClient, pr_number: int, body: str) -> None:
    """
    Keep a single preview comment on the pull request.

    The comment written by an earlier run is edited in place; a new one is
    only created when none exists.

    Raises:
        GitHubAPIError: If API call fails
    """
    body = f"{body}\n\n{COMMENT_MARKER}"
    comments = await client.list_comments(pr_number)
    existing = next((c for c in comments if is_action_comment(c)), None)

    if existing:
        logger.info("Updating preview comment %s on PR #%s", existing["id"], pr_number)
        await client.update_comment(existing["id"], body)
    else:
        logger.info("Creating preview comment on PR #%s", pr_number)
        await client.create_comment(pr_number, body)
