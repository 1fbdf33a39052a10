"""
Preview channel id derivation.
"""

import re

from hosting_deploy.core.config import PRODUCTION_CHANNEL
from hosting_deploy.core.exceptions import ConfigurationError
from hosting_deploy.core.logging import get_logger
from hosting_deploy.models.context import PRContext

logger = get_logger(__name__)

BRANCH_NAME_LIMIT = 20

# Channel ids may only hold letters, digits, underscores, hyphens and periods
INVALID_CHANNEL_CHARS = re.compile(r"[^a-zA-Z0-9_\-.]")


def sanitize_channel_id(raw: str) -> str:
    """Replace characters the hosting backend rejects with underscores."""
    corrected = INVALID_CHANNEL_CHARS.sub("_", raw)
    if corrected != raw:
        logger.info("ChannelId '%s' contains invalid characters. Using '%s' instead.", raw, corrected)
    return corrected


def get_channel_id(configured_channel_id: str, pr_context: PRContext | None) -> str:
    """
    Resolve the preview channel for this run.

    An explicit channel id is used as given. Without one, the id is built
    from the pull request as pr<number>-<branch>.

    Raises:
        ConfigurationError: If there is neither a channel id nor a PR context
    """
    if configured_channel_id and configured_channel_id != PRODUCTION_CHANNEL:
        return configured_channel_id

    if pr_context is None:
        raise ConfigurationError(
            "No channelId was given and this run is not associated with a pull request. "
            "Set the channelId input or the prNumber, commitSHA and prBranchName inputs."
        )

    branch_name = pr_context.branch_name[:BRANCH_NAME_LIMIT]
    return sanitize_channel_id(f"pr{pr_context.pr_number}-{branch_name}")
