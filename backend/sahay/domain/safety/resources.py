from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

__all__ = ["CrisisResource", "CRISIS_RESOURCES", "crisis_message"]

ResourceKind = Literal["primary", "secondary", "emergency"]

_TEL_STRIP = re.compile(r"[^0-9+]")


@dataclass(frozen=True)
class CrisisResource:
    name: str
    phone: str
    description: str
    kind: ResourceKind = "secondary"

    @property
    def tel_uri(self) -> str:
        return "tel:" + _TEL_STRIP.sub("", self.phone)

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "phone": self.phone,
            "description": self.description,
            "kind": self.kind,
            "tel": self.tel_uri,
        }


CRISIS_RESOURCES: Tuple[CrisisResource, ...] = (
    CrisisResource("AASRA", "+91-9152987821", "24/7 Suicide Prevention Helpline", "primary"),
    CrisisResource("iCall", "+91-9152987821", "Psychosocial Counseling"),
    CrisisResource("Vandrevala Foundation", "1860-2662-345", "24/7 Mental Health Support"),
    CrisisResource("Emergency Services", "112", "National Emergency Number", "emergency"),
)


# Region-specific additions (kept conservative and widely recognized)
_REGION_LINES: Dict[str, str] = {
    "IN": "In India, you can call AASRA at +91-9152987821 (24/7) or dial 112 for emergency services. ",
    "US": "In the United States, you can call or text 988 (Suicide & Crisis Lifeline). ",
    "UK": "In the UK & ROI, you can contact Samaritans at 116 123. ",
}


def crisis_message(context: Optional[List[str]] = None, region: Optional[str] = None) -> str:
    """
    Returns a concise, action-oriented crisis message.
    - Always directs to local emergency services.
    - Unknown or empty region falls back to the India helplines.
    - If context snippets mention a therapist or counsellor, prompts them to reach out as well.
    """
    region = (region or "IN").upper()

    msg = "I'm concerned about your safety. Please contact your local emergency services now. "
    msg += _REGION_LINES.get(region, _REGION_LINES["IN"])

    if context and any(re.search(r"therap|counsel", (c or "").lower()) for c in context):
        msg += "If you have a therapist, counsellor or trusted contact, please reach out to them as well."

    return msg.strip()
