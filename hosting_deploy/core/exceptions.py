"""
Custom application exceptions.
"""


class DeployActionError(Exception):
    """Base exception for deploy action errors."""
    pass


class ConfigurationError(DeployActionError):
    """Action inputs or the workspace are not usable for a deploy."""
    pass


class ProcessExecutionError(DeployActionError):
    """The firebase CLI exited with an error."""

    def __init__(self, command: list[str], returncode: int | None, message: str | None = None):
        self.command = command
        self.returncode = returncode
        if message is None:
            message = f"The process '{command[0]}' failed with exit code {returncode}"
        super().__init__(message)


class PayloadParseError(DeployActionError):
    """CLI output could not be parsed as a deploy result."""
    pass


class DeploymentError(DeployActionError):
    """The CLI ran but reported a failed deploy."""
    pass


class APIError(DeployActionError):
    """External API call failed."""
    pass


class GitHubAPIError(APIError):
    """GitHub API call failed."""
    pass
