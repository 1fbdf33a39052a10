"""
Deploy run orchestration and main entry point.
"""

import asyncio
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from hosting_deploy.core.config import Settings, get_settings
from hosting_deploy.core.exceptions import ConfigurationError, DeploymentError, GitHubAPIError
from hosting_deploy.core.logging import setup_logging, get_logger
from hosting_deploy.core.states import RunState, is_valid_transition
from hosting_deploy.core.workflow import group, set_failed, set_output
from hosting_deploy.models import CheckDetails, DeployAuth, DeployConfig, ErrorResult, PRContext
from hosting_deploy.models import get_pr_context, load_event
from hosting_deploy.services.channel import get_channel_id
from hosting_deploy.services.credentials import resolve_auth
from hosting_deploy.services.deploy import deploy, deploy_production_site
from hosting_deploy.services.github import GitHubClient
from hosting_deploy.services.reporter import (
    Finish,
    build_preview_comment,
    create_check,
    log_finish,
    post_or_update_comment,
    prepare_url_markdown_list,
    production_summary,
    production_url,
)

logger = get_logger(__name__)


def verify_entry_point(entry_point: str) -> None:
    """
    Move into the configured entry point and require a firebase.json there.

    Raises:
        ConfigurationError: If the directory or firebase.json is missing
    """
    if entry_point != ".":
        logger.info("Changing to directory: %s", entry_point)
        try:
            os.chdir(entry_point)
        except OSError as e:
            raise ConfigurationError(f"Error changing to directory {entry_point}: {e}") from e

    if Path("firebase.json").exists():
        logger.info("firebase.json file found. Continuing deploy.")
    else:
        raise ConfigurationError(
            "firebase.json file not found. If your firebase.json file is not in the root of your repo, "
            "edit the entryPoint option of this GitHub action."
        )


class DeployRun:
    """One deploy from environment checks to the final report."""

    def __init__(
        self,
        settings: Settings,
        pr_context: PRContext | None,
        github: GitHubClient | None = None,
    ):
        self.settings = settings
        self.pr_context = pr_context
        self.github = github
        self.state = RunState.INIT

    def _advance(self, new: RunState) -> None:
        if not is_valid_transition(self.state, new):
            raise RuntimeError(f"Invalid run transition {self.state.value} -> {new.value}")
        logger.debug("Run state %s -> %s", self.state.value, new.value)
        self.state = new

    async def _create_finish(self) -> Finish:
        if self.github is None or self.pr_context is None:
            return log_finish
        try:
            return await create_check(self.github, self.pr_context.commit_sha)
        except GitHubAPIError as e:
            logger.warning("Could not create a check run, the result will only be logged: %s", e)
            return log_finish

    async def execute(self) -> bool:
        """
        Run the deploy and report its outcome.

        Returns:
            True if the deploy and its reporting succeeded
        """
        finish = await self._create_finish()

        try:
            self._advance(RunState.VERIFYING)
            with group("Verifying firebase.json exists"):
                verify_entry_point(self.settings.entry_point)

            self._advance(RunState.AUTHENTICATING)
            with group("Setting up CLI credentials"):
                auth = resolve_auth(self.settings.firebase_service_account, self.settings.firebase_token)

            self._advance(RunState.DEPLOYING)
            if self.settings.is_production_deploy:
                await self._deploy_production(auth, finish)
            else:
                await self._deploy_preview(auth, finish)

            self._advance(RunState.DONE)
            return True

        except Exception as e:
            failed_state = self.state
            self._advance(RunState.REPORTING_FAILURE)
            logger.error("Deploy failed while %s: %s", failed_state.value, e)
            set_failed(str(e))

            try:
                await finish(
                    CheckDetails(
                        conclusion="failure",
                        title="Deploy preview failed",
                        summary=f"Error: {e}",
                    )
                )
            except GitHubAPIError as report_error:
                logger.error("Could not report the failure to the check run: %s", report_error)

            self._advance(RunState.DONE)
            return False

    async def _deploy_production(self, auth: DeployAuth, finish: Finish) -> None:
        project_id = self.settings.project_id

        with group("Deploying to production site"):
            deployment = await deploy_production_site(
                auth,
                project_id,
                self.settings.target_list,
                cli=self.settings.cli_command,
            )
        if isinstance(deployment, ErrorResult):
            raise DeploymentError(deployment.error)

        self._advance(RunState.REPORTING_SUCCESS)
        url = production_url(project_id)
        set_output("details_url", url, self.settings.github_output)
        await finish(
            CheckDetails(
                conclusion="success",
                title="Production deploy succeeded",
                summary=production_summary(project_id),
                details_url=url,
            )
        )

    async def _deploy_preview(self, auth: DeployAuth, finish: Finish) -> None:
        channel_id = get_channel_id(self.settings.channel_id, self.pr_context)

        with group(f"Deploying to Firebase preview channel {channel_id}"):
            deployment = await deploy(
                DeployConfig(
                    auth=auth,
                    project_id=self.settings.project_id,
                    expires=self.settings.expires,
                    channel_id=channel_id,
                    targets=self.settings.target_list,
                ),
                cli=self.settings.cli_command,
            )
        if isinstance(deployment, ErrorResult):
            raise DeploymentError(deployment.error)

        self._advance(RunState.REPORTING_SUCCESS)
        expire_time = deployment.sites[0].expire_time
        urls = deployment.urls

        set_output("urls", urls, self.settings.github_output)
        set_output("expire_time", expire_time, self.settings.github_output)
        set_output("details_url", urls[0], self.settings.github_output)

        urls_markdown = prepare_url_markdown_list(urls, self.settings.comment_url_path)

        if self.github is not None and self.pr_context is not None:
            await post_or_update_comment(
                self.github,
                self.pr_context.pr_number,
                build_preview_comment(urls_markdown, self.pr_context.short_sha, expire_time),
            )

        await finish(
            CheckDetails(
                conclusion="success",
                title="Deploy preview succeeded",
                summary=urls_markdown,
                details_url=urls[0],
            )
        )


def create_github_client(settings: Settings) -> GitHubClient | None:
    """GitHub client for reporting, or None when no token is configured."""
    if not settings.repo_token:
        return None
    if not settings.github_repository:
        logger.warning("A repo token is set but GITHUB_REPOSITORY is not; skipping GitHub reporting.")
        return None
    return GitHubClient(settings.repo_token, settings.github_repository, settings.github_api_url)


async def main() -> int:
    """Main action entry point. Returns the process exit code."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        set_failed(f"Invalid action inputs: {e}")
        return 1

    setup_logging(settings.log_level)

    pr_context = get_pr_context(settings, load_event(settings.github_event_path))
    run = DeployRun(settings, pr_context, create_github_client(settings))
    succeeded = await run.execute()
    return 0 if succeeded else 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))
