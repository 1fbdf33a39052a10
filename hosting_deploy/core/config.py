"""
Action configuration using pydantic-settings.
Inputs come from the INPUT_* variables GitHub Actions exports for each
`with:` entry, runner context from the GITHUB_* variables.
"""

import logging
import shlex

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

PRODUCTION_CHANNEL = "live"
DEFAULT_CLI = "npx firebase-tools"


class Settings(BaseSettings):
    """Action settings loaded from environment variables."""

    # Credentials (exactly one is required, checked at deploy time)
    firebase_service_account: str = Field("", validation_alias="INPUT_FIREBASESERVICEACCOUNT")
    firebase_token: str = Field("", validation_alias="INPUT_FIREBASETOKEN")

    # Deploy options
    expires: str = Field("", validation_alias="INPUT_EXPIRES")
    comment_url_path: str = Field("", validation_alias="INPUT_COMMENTURLPATH")
    project_id: str = Field("", validation_alias="INPUT_PROJECTID")
    channel_id: str = Field("", validation_alias="INPUT_CHANNELID")
    targets: str = Field("", validation_alias="INPUT_TARGETS")
    entry_point: str = Field(".", validation_alias="INPUT_ENTRYPOINT")
    firebase_tools_version: str = Field("", validation_alias="INPUT_FIREBASETOOLSVERSION")

    # GitHub reporting
    repo_token: str = Field("", validation_alias=AliasChoices("GITHUB_TOKEN", "INPUT_REPOTOKEN"))

    # Pull request overrides (for workflow_run / push triggered deploys)
    pr_number: int | None = Field(None, validation_alias="INPUT_PRNUMBER")
    commit_sha: str = Field("", validation_alias="INPUT_COMMITSHA")
    pr_branch_name: str = Field("", validation_alias="INPUT_PRBRANCHNAME")

    # Runner context
    github_repository: str = Field("", validation_alias="GITHUB_REPOSITORY")
    github_event_path: str = Field("", validation_alias="GITHUB_EVENT_PATH")
    github_output: str = Field("", validation_alias="GITHUB_OUTPUT")
    github_api_url: str = Field("https://api.github.com", validation_alias="GITHUB_API_URL")
    runner_debug: str = Field("", validation_alias="RUNNER_DEBUG")

    @field_validator(
        "firebase_service_account",
        "firebase_token",
        "expires",
        "comment_url_path",
        "project_id",
        "channel_id",
        "targets",
        "firebase_tools_version",
        "repo_token",
        "commit_sha",
        "pr_branch_name",
        mode="before",
    )
    @classmethod
    def _strip(cls, value: str | None) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("entry_point", mode="before")
    @classmethod
    def _default_entry_point(cls, value: str | None) -> str:
        cleaned = str(value).strip() if value is not None else ""
        return cleaned or "."

    @field_validator("pr_number", mode="before")
    @classmethod
    def _parse_pr_number(cls, value: str | int | None) -> int | None:
        if value is None or value == "":
            return None
        return int(str(value).strip())

    @field_validator("github_api_url", mode="before")
    @classmethod
    def _normalize_api_url(cls, value: str | None) -> str:
        cleaned = str(value).strip().rstrip("/") if value else ""
        return cleaned or "https://api.github.com"

    @property
    def is_production_deploy(self) -> bool:
        """Whether the configured channel is the live site."""
        return self.channel_id == PRODUCTION_CHANNEL

    @property
    def target_list(self) -> list[str]:
        """Parse comma-separated hosting targets."""
        return [t.strip() for t in self.targets.split(",") if t.strip()]

    @property
    def cli_command(self) -> list[str]:
        """Command prefix used to run the firebase CLI."""
        command = shlex.split(DEFAULT_CLI)
        if self.firebase_tools_version:
            command[-1] = f"{command[-1]}@{self.firebase_tools_version}"
        return command

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.runner_debug == "1" else logging.INFO

    model_config = {
        "extra": "ignore",
        "frozen": True,
        "populate_by_name": True,
        # unset secrets arrive as empty strings
        "env_ignore_empty": True,
    }


def get_settings() -> Settings:
    """Read the action configuration from the environment."""
    return Settings()
