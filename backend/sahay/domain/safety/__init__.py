from .models import Severity, ClassificationResult
from .classifier import classify, classify_async, is_crisis
from .escalation import EscalationDecision, PanelState, decide, observe, dismiss, reset, resources_visible

__all__ = [
    "Severity", "ClassificationResult",
    "classify", "classify_async", "is_crisis",
    "EscalationDecision", "PanelState", "decide", "observe", "dismiss", "reset", "resources_visible",
]
