"""Advisory safety report returned by an analysis provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(slots=True, frozen=True)
class SafetyReport:
    """Display-only assessment of a package; never persisted."""

    security_score: float
    compatibility: str
    recommendations: list[str] = field(default_factory=list)
    vulnerabilities_found: int = 0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SafetyReport":
        try:
            score = float(payload["securityScore"])
            compatibility = str(payload["compatibility"])
            recommendations = [str(item) for item in payload.get("recommendations") or []]
            vulnerabilities = int(payload.get("vulnerabilitiesFound") or 0)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed safety report: {exc}") from exc
        return cls(
            security_score=max(0.0, min(100.0, score)),
            compatibility=compatibility,
            recommendations=recommendations,
            vulnerabilities_found=max(0, vulnerabilities),
        )
