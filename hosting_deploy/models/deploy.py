"""
Data models for deploy inputs and firebase CLI results.
"""

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class DeployAuth:
    """Credentials handed to the firebase CLI. Exactly one field is set."""

    gac_filename: str | None = None
    firebase_token: str | None = None

    def __post_init__(self):
        if bool(self.gac_filename) == bool(self.firebase_token):
            raise ValueError("DeployAuth needs exactly one of gac_filename or firebase_token")

    def to_env(self) -> dict[str, str]:
        """Environment variable carrying the credential."""
        if self.gac_filename:
            return {"GOOGLE_APPLICATION_CREDENTIALS": self.gac_filename}
        return {"FIREBASE_TOKEN": self.firebase_token}


@dataclass(frozen=True)
class DeployConfig:
    """Everything needed for one preview channel deploy."""

    auth: DeployAuth
    project_id: str
    expires: str
    channel_id: str
    targets: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SiteDeploy:
    """One hosting site updated by a channel deploy."""

    site: str
    url: str
    expire_time: str
    target: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "SiteDeploy":
        return cls(
            site=data["site"],
            url=data["url"],
            expire_time=data["expireTime"],
            target=data.get("target"),
        )


@dataclass(frozen=True)
class ErrorResult:
    """The CLI reported a failed deploy."""

    error: str
    status: Literal["error"] = "error"


@dataclass(frozen=True)
class ChannelSuccessResult:
    """Successful preview channel deploy, keyed by site name."""

    result: dict[str, SiteDeploy]
    status: Literal["success"] = "success"

    @property
    def sites(self) -> list[SiteDeploy]:
        return list(self.result.values())

    @property
    def urls(self) -> list[str]:
        return [site.url for site in self.result.values()]


@dataclass(frozen=True)
class ProductionSuccessResult:
    """Successful release to the live channel."""

    result: dict[str, Any]
    status: Literal["success"] = "success"

    @property
    def hosting(self) -> str | list[str]:
        """Released version name(s), a list when several targets went live."""
        return self.result["hosting"]


ChannelDeployResult = ChannelSuccessResult | ErrorResult
ProductionDeployResult = ProductionSuccessResult | ErrorResult
