"""
Data model for the final check run report.
"""

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class CheckDetails:
    """Conclusion of a run as shown on the commit check."""

    conclusion: Literal["success", "failure"]
    title: str
    summary: str
    details_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the check run update payload."""
        data: dict[str, Any] = {
            "conclusion": self.conclusion,
            "output": {"title": self.title, "summary": self.summary},
        }
        if self.details_url:
            data["details_url"] = self.details_url
        return data
