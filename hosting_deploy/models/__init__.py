# Models - deploy inputs, CLI results and reporting payloads
from .check import CheckDetails
from .context import PRContext, get_pr_context, load_event
from .deploy import (
    ChannelDeployResult,
    ChannelSuccessResult,
    DeployAuth,
    DeployConfig,
    ErrorResult,
    ProductionDeployResult,
    ProductionSuccessResult,
    SiteDeploy,
)

__all__ = [
    "CheckDetails",
    "PRContext",
    "get_pr_context",
    "load_event",
    "ChannelDeployResult",
    "ChannelSuccessResult",
    "DeployAuth",
    "DeployConfig",
    "ErrorResult",
    "ProductionDeployResult",
    "ProductionSuccessResult",
    "SiteDeploy",
]
