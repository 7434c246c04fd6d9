"""Pluggable providers for the advisory package safety report.

The report is advisory metadata shown to an administrator before upload. It
never reaches the catalog, so every provider failure degrades to ``None``
(unavailable) instead of an error.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol

import httpx

from autostore.core.config import AdvisorySettings

from .models import SafetyReport

logger = logging.getLogger(__name__)

REPORT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "securityScore": {"type": "NUMBER", "description": "Score from 0 to 100"},
        "compatibility": {"type": "STRING", "description": "High/Medium/Low for in-vehicle displays"},
        "recommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "3 UI/UX improvements for a vehicle screen",
        },
        "vulnerabilitiesFound": {"type": "NUMBER"},
    },
    "required": ["securityScore", "compatibility", "recommendations", "vulnerabilitiesFound"],
}


class SafetyAdvisor(Protocol):
    async def analyze(self, name: str, description: str) -> Optional[SafetyReport]:
        ...


class DisabledSafetyAdvisor:
    """Used when no provider is configured."""

    async def analyze(self, name: str, description: str) -> Optional[SafetyReport]:
        return None


class GeminiSafetyAdvisor:
    """Gemini ``generateContent`` client returning a structured report."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @staticmethod
    def build_prompt(name: str, description: str) -> str:
        return (
            "Analyze this Android app metadata for in-vehicle infotainment compatibility:\n"
            f"Name: {name}\n"
            f"Description: {description}"
        )

    async def analyze(self, name: str, description: str) -> Optional[SafetyReport]:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": self.build_prompt(name, description)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": REPORT_SCHEMA,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=body)
                response.raise_for_status()
                data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
            return SafetyReport.from_mapping(json.loads(text))
        except httpx.TimeoutException:
            logger.warning("Safety analysis timed out for %s", name)
        except httpx.HTTPStatusError as exc:
            logger.warning("Safety analysis failed for %s: HTTP %s", name, exc.response.status_code)
        except httpx.HTTPError as exc:
            logger.warning("Safety analysis transport error for %s: %s", name, exc)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Safety analysis returned an unusable payload for %s: %s", name, exc)
        return None


def build_advisor(settings: AdvisorySettings) -> SafetyAdvisor:
    if not settings.api_key:
        return DisabledSafetyAdvisor()
    return GeminiSafetyAdvisor(
        settings.api_key,
        model=settings.model,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
