"""
GitHub Actions workflow commands: log groups, step outputs and the failure signal.

See https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
"""

import json
import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from hosting_deploy.core.logging import get_logger

logger = get_logger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue(command: str, message: str = "") -> None:
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def start_group(title: str) -> None:
    _issue("group", title)


def end_group() -> None:
    _issue("endgroup")


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything logged inside the block under a collapsible title."""
    start_group(title)
    try:
        yield
    finally:
        end_group()


def _to_command_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def set_output(name: str, value: Any, output_path: str | None) -> None:
    """
    Write a step output to the $GITHUB_OUTPUT file.

    Non-string values are serialized as JSON, so lists arrive in the workflow
    as a JSON array string.
    """
    if not output_path:
        logger.info("Output %s=%s (GITHUB_OUTPUT not set)", name, _to_command_value(value))
        return

    serialized = _to_command_value(value)
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with Path(output_path).open("a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{serialized}\n{delimiter}\n")


def set_failed(message: str) -> None:
    """Emit an error annotation. The caller is responsible for the exit code."""
    _issue("error", message)
