"""Advisory safety analysis exports."""

from .models import SafetyReport
from .service import DisabledSafetyAdvisor, GeminiSafetyAdvisor, SafetyAdvisor, build_advisor

__all__ = [
    "DisabledSafetyAdvisor",
    "GeminiSafetyAdvisor",
    "SafetyAdvisor",
    "SafetyReport",
    "build_advisor",
]
