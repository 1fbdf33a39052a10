# Services module - credentials, firebase CLI and GitHub reporting
from .channel import get_channel_id
from .credentials import resolve_auth
from .deploy import deploy, deploy_production_site
from .reporter import create_check, log_finish, post_or_update_comment

__all__ = [
    "get_channel_id",
    "resolve_auth",
    "deploy",
    "deploy_production_site",
    "create_check",
    "log_finish",
    "post_or_update_comment",
]
