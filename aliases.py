# aliases.py

import logging
from types import MappingProxyType

from rapidfuzz import process

from logger_config import get_logger

logger = get_logger(__name__)

OFFICE_LIGHT = "office_light"
KITCHEN_LIGHT = "kitchen_light"
OFFICE_FAN = "office_fan"

DEVICES = (OFFICE_LIGHT, KITCHEN_LIGHT, OFFICE_FAN)

# This is a somewhat naive way of mapping synonyms onto a single canonical term.
# A phonetic search index or user-defined aliases would scale better.
DEVICE_ALIASES = MappingProxyType({
    "office light": OFFICE_LIGHT,
    "office": OFFICE_LIGHT,
    "kitchen light": KITCHEN_LIGHT,
    "kitchen": KITCHEN_LIGHT,
    "office fan": OFFICE_FAN,
    "fan": OFFICE_FAN,
})

COMMAND_ALIASES = MappingProxyType({
    "on": True,
    "off": False,
})


class AliasResolver:
    def __init__(self, device_aliases=DEVICE_ALIASES, command_aliases=COMMAND_ALIASES):
        """
        Normalizes spoken phrases into canonical targets.

        Args:
            device_aliases: phrase -> device id, shared read-only.
            command_aliases: phrase -> switch state, shared read-only.
        """
        self.device_aliases = device_aliases
        self.command_aliases = command_aliases

    def resolve_device(self, phrase):
        if phrase is None:
            return None

        device = self.device_aliases.get(phrase)
        if device is None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Aliases: unknown device '{phrase}', closest alias: {self.closest_device(phrase)}")
        return device

    def resolve_command(self, phrase):
        if phrase is None:
            return None

        # default to "on"
        return self.command_aliases.get(phrase, True)

    def closest_device(self, phrase: str, threshold=80):
        """
        Best known device phrase for an unresolved one, for diagnostics only.
        Never used to resolve a command.
        """
        if not phrase or not self.device_aliases:
            return None
        best_match, score, _ = process.extractOne(phrase, list(self.device_aliases))
        if score >= threshold:
            return best_match
        return None
