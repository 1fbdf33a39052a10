"""
Runs the firebase CLI and classifies what it reports.
"""

import asyncio
import json
import logging
import os
import shlex
from typing import Any

from hosting_deploy.core.config import DEFAULT_CLI
from hosting_deploy.core.exceptions import PayloadParseError, ProcessExecutionError
from hosting_deploy.core.logging import get_logger
from hosting_deploy.models.deploy import (
    ChannelDeployResult,
    ChannelSuccessResult,
    DeployAuth,
    DeployConfig,
    ErrorResult,
    ProductionDeployResult,
    ProductionSuccessResult,
    SiteDeploy,
)

logger = get_logger(__name__)

DEPLOY_AGENT = "action-hosting-deploy"
CREDENTIAL_VARIABLES = ("GOOGLE_APPLICATION_CREDENTIALS", "FIREBASE_TOKEN")
STREAM_LIMIT = 2 ** 20


def build_env(auth: DeployAuth) -> dict[str, str]:
    """Inherited environment plus the agent marker and exactly one credential."""
    env = {k: v for k, v in os.environ.items() if k not in CREDENTIAL_VARIABLES}
    env["FIREBASE_DEPLOY_AGENT"] = DEPLOY_AGENT
    env.update(auth.to_env())
    return env


def final_payload(chunks: list[str]) -> str:
    """
    Return the last thing the CLI wrote.

    Progress lines may come first. The result is the last JSON document,
    which the CLI starts with "{" in the first column, or else the last
    non-empty line.
    """
    lines = [chunk.rstrip("\r\n") for chunk in chunks]
    for index in range(len(lines) - 1, -1, -1):
        if lines[index].startswith("{"):
            return "\n".join(lines[index:]).strip()
    for line in reversed(lines):
        if line.strip():
            return line.strip()
    return ""


async def _stream_process(
    command: list[str],
    env: dict[str, str],
    buffer: list[str],
    echo_level: int,
) -> None:
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            env=env,
            limit=STREAM_LIMIT,
        )
    except OSError as e:
        raise ProcessExecutionError(command, None, f"Unable to start '{command[0]}': {e}") from e

    try:
        async for raw in process.stdout:
            line = raw.decode("utf-8", errors="replace")
            buffer.append(line)
            logger.log(echo_level, line.rstrip("\n"))
    except (ValueError, asyncio.LimitOverrunError) as e:
        process.kill()
        await process.wait()
        raise ProcessExecutionError(command, None, f"Unable to read output of '{command[0]}': {e}") from e

    returncode = await process.wait()
    if returncode != 0:
        raise ProcessExecutionError(command, returncode)


async def exec_with_credentials(
    cli: list[str],
    args: list[str],
    project_id: str,
    auth: DeployAuth,
    debug: bool = False,
) -> str:
    """
    Run a firebase CLI command with the given credentials.

    The first attempt uses --json so the result can be parsed. If it fails,
    the command is run once more with --debug purely for a readable error
    in the log.

    Returns:
        The final output written by the CLI, or "" if it printed nothing

    Raises:
        ProcessExecutionError: If the --debug attempt fails as well
    """
    command = [
        *cli,
        *args,
        *(["--project", project_id] if project_id else []),
        "--debug" if debug else "--json",
    ]
    buffer: list[str] = []

    try:
        await _stream_process(
            command,
            build_env(auth),
            buffer,
            logging.INFO if debug else logging.DEBUG,
        )
    except ProcessExecutionError as e:
        logger.error("".join(buffer))
        logger.error(str(e))

        if debug:
            raise
        logger.info("Retrying deploy with the --debug flag for better error output")
        return await exec_with_credentials(cli, args, project_id, auth, debug=True)

    return final_payload(buffer)


def _load_payload(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadParseError(f"Unable to parse firebase CLI output as JSON ({e}): {text[:500]!r}") from e

    if not isinstance(data, dict) or data.get("status") not in ("success", "error"):
        raise PayloadParseError(f"Unexpected firebase CLI output: {text[:500]!r}")
    return data


def parse_channel_result(text: str) -> ChannelDeployResult:
    """
    Classify the output of hosting:channel:deploy.

    Raises:
        PayloadParseError: If the output is not a channel deploy result
    """
    data = _load_payload(text)
    if data["status"] == "error":
        return ErrorResult(error=str(data.get("error", "")))

    try:
        sites = {name: SiteDeploy.from_dict(site) for name, site in data["result"].items()}
    except (KeyError, TypeError, AttributeError) as e:
        raise PayloadParseError(f"Malformed channel deploy result: {text[:500]!r}") from e
    if not sites:
        raise PayloadParseError("Channel deploy result lists no sites")
    return ChannelSuccessResult(result=sites)


def parse_production_result(text: str) -> ProductionDeployResult:
    """
    Classify the output of deploy --only hosting.

    Raises:
        PayloadParseError: If the output is not a production deploy result
    """
    data = _load_payload(text)
    if data["status"] == "error":
        return ErrorResult(error=str(data.get("error", "")))

    result = data.get("result")
    if not isinstance(result, dict) or "hosting" not in result:
        raise PayloadParseError(f"Malformed production deploy result: {text[:500]!r}")
    return ProductionSuccessResult(result=result)


async def deploy(config: DeployConfig, cli: list[str] | None = None) -> ChannelDeployResult:
    """Deploy to a preview channel."""
    args = [
        "hosting:channel:deploy",
        *(["--only", ",".join(config.targets)] if config.targets else []),
        config.channel_id,
        *(["--expires", config.expires] if config.expires else []),
    ]
    text = await exec_with_credentials(
        cli or shlex.split(DEFAULT_CLI),
        args,
        config.project_id,
        config.auth,
    )
    return parse_channel_result(text)


async def deploy_production_site(
    auth: DeployAuth,
    project_id: str,
    targets: list[str],
    cli: list[str] | None = None,
) -> ProductionDeployResult:
    """Release the hosting targets to the live channel."""
    if targets:
        target_arg = ",".join(f"hosting:{target}" for target in targets)
    else:
        target_arg = "hosting"

    text = await exec_with_credentials(
        cli or shlex.split(DEFAULT_CLI),
        ["deploy", "--only", target_arg],
        project_id,
        auth,
    )
    return parse_production_result(text)
