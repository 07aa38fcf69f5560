"""Failure model."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Failure:
    """A per-item failure reported alongside a describe or run response."""

    arn: str
    reason: str | None = None
    detail: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Failure":
        return cls(
            arn=data.get("arn", ""),
            reason=data.get("reason"),
            detail=data.get("detail"),
        )
