# GitHub services - check runs and PR comments
from .client import GitHubClient

__all__ = ["GitHubClient"]
