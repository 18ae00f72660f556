# nlu.py

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from config import CONTROL_DEVICE_INTENT, DEVICE_SLOT, COMMAND_SLOT

UNKNOWN_INTENT = "unknown"


@dataclass
class Slot:
    name: str
    raw_value: Optional[str]
    value: Optional[object] = None


@dataclass
class NLUResult:
    intent: str
    slots: Dict[str, Slot] = field(default_factory=dict)
    utterance: str = ""
    confidence: float = 1.0

    def raw_slot(self, name) -> Optional[str]:
        slot = self.slots.get(name)
        if slot is None:
            return None
        return slot.raw_value

    @classmethod
    def from_dict(cls, payload: dict) -> "NLUResult":
        """
        Builds a result from a JSON payload like:
            {"intent": "...", "slots": {"device": {"rawValue": "office"}}}

        A slot may also be given as a plain string.
        """
        slots = {}
        for name, slot in (payload.get("slots") or {}).items():
            if isinstance(slot, dict):
                raw = slot.get("rawValue", slot.get("raw_value"))
                slots[name] = Slot(name, raw, slot.get("value"))
            else:
                slots[name] = Slot(name, slot)
        return cls(
            intent=payload["intent"],
            slots=slots,
            utterance=payload.get("utterance", ""),
            confidence=float(payload.get("confidence", 1.0)),
        )


# "turn the office light on", "switch off fan", "please turn on the kitchen light", "turn off"
TURN_PATTERN = re.compile(r"\b(?:turn|switch|set)\s+(?:(?P<cmd1>on|off)(?:\s+|$))?(?:the\s+)?(?P<device>.*?)(?:\s+(?P<cmd2>on|off))?$")
# "kitchen off", "office fan on"
SHORT_PATTERN = re.compile(r"^(?:the\s+)?(?P<device>.+?)\s+(?P<command>on|off)$")


def parse_utterance(text: str) -> NLUResult:
    """
    Minimal rule-based NLU for local transcripts. Slots keep the raw
    spoken strings; normalization happens in the device controller.
    """
    utterance = re.sub(r"[^\w\s]", "", (text or "").lower()).strip()
    utterance = re.sub(r"^please\s+", "", utterance)

    match = TURN_PATTERN.search(utterance)
    if match:
        command = match.group("cmd2") or match.group("cmd1")
        return _control_result(utterance, match.group("device"), command)

    match = SHORT_PATTERN.match(utterance)
    if match:
        return _control_result(utterance, match.group("device"), match.group("command"))

    return NLUResult(UNKNOWN_INTENT, utterance=utterance, confidence=0.0)


def _control_result(utterance, device, command):
    slots = {}
    if device:
        slots[DEVICE_SLOT] = Slot(DEVICE_SLOT, device)
    if command:
        slots[COMMAND_SLOT] = Slot(COMMAND_SLOT, command)
    return NLUResult(CONTROL_DEVICE_INTENT, slots, utterance)
