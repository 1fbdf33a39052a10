"""
Pull request context for the current workflow run.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hosting_deploy.core.config import Settings
from hosting_deploy.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PRContext:
    """The pull request a preview deploy belongs to."""

    pr_number: int
    commit_sha: str
    branch_name: str

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:7]


def load_event(event_path: str) -> dict[str, Any]:
    """Read the webhook payload that triggered the workflow."""
    if not event_path:
        return {}
    try:
        return json.loads(Path(event_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Event payload %s does not exist", event_path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Event payload %s is not valid JSON: %s", event_path, e)
        return {}


def get_pr_context(settings: Settings, event: dict[str, Any]) -> PRContext | None:
    """
    Build the PR context from explicit inputs, falling back to the
    pull_request event payload.

    Returns:
        PRContext, or None unless number, commit and branch are all known
    """
    payload = event.get("pull_request") or {}
    head = payload.get("head") or {}

    if settings.pr_number is not None:
        pr_number = settings.pr_number
    elif payload.get("number"):
        pr_number = int(payload["number"])
    else:
        return None

    commit_sha = settings.commit_sha or head.get("sha")
    if not commit_sha:
        return None

    branch_name = settings.pr_branch_name or head.get("ref")
    if not branch_name:
        return None

    return PRContext(pr_number=pr_number, commit_sha=commit_sha, branch_name=branch_name)
