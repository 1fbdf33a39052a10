"""
Turns the action's credential inputs into a DeployAuth.
"""

import tempfile

from hosting_deploy.core.exceptions import ConfigurationError
from hosting_deploy.core.logging import get_logger
from hosting_deploy.models.deploy import DeployAuth

logger = get_logger(__name__)


def create_gac_file(service_account: str) -> str:
    """
    Write service account JSON to a temporary file for
    GOOGLE_APPLICATION_CREDENTIALS.

    The file is left in place; runners are discarded after the job.
    """
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8") as f:
        f.write(service_account)
        return f.name


def resolve_auth(service_account: str, firebase_token: str) -> DeployAuth:
    """
    Pick the single credential the CLI should use.

    Raises:
        ConfigurationError: If both or neither credential is given
    """
    if service_account and firebase_token:
        raise ConfigurationError(
            "can only specify either 'firebaseServiceAccount' or 'firebaseToken', not both!"
        )

    if service_account:
        auth = DeployAuth(gac_filename=create_gac_file(service_account))
        logger.info("Created a temporary file with Application Default Credentials.")
        return auth

    if firebase_token:
        logger.info("Authenticating with token.")
        return DeployAuth(firebase_token=firebase_token)

    raise ConfigurationError("must specify either 'firebaseServiceAccount' or 'firebaseToken'")
