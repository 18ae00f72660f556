# controller.py

from urllib.parse import urlencode, urlsplit, parse_qs

from config import (ACKNOWLEDGEMENT_TEXT, ACK_DEEP_LINKS, CONTROL_DEVICE_INTENT,
                    DEVICE_SLOT, COMMAND_SLOT)
from logger_config import get_logger

logger = get_logger(__name__)

DEEP_LINK_BASE = "switches://control"


def query_parameter(uri, name):
    """First value of a query parameter, or None when the parameter is absent."""
    values = parse_qs(urlsplit(uri).query, keep_blank_values=True).get(name)
    if not values:
        return None
    return values[0]


def build_control_uri(device, command):
    # absent slots stay absent in the URI
    params = {}
    if device is not None:
        params[DEVICE_SLOT] = device
    if command is not None:
        params[COMMAND_SLOT] = command
    return f"{DEEP_LINK_BASE}?{urlencode(params)}"


class Controller:
    def __init__(self, resolver, switchboard, tts=None, acknowledge_deep_links=ACK_DEEP_LINKS):
        """
        Initialize the Controller.

        Args:
            resolver: AliasResolver turning spoken phrases into a device and a state.
            switchboard: SwitchBoard owning the on-screen switches.
            tts: speech synthesis service with a synthesize(text) method, optional.
            acknowledge_deep_links: speak the acknowledgement for deep links too.
        """
        self.resolver = resolver
        self.switchboard = switchboard
        self.tts = tts
        self.acknowledge_deep_links = acknowledge_deep_links

    def resolve(self, device_phrase, command_phrase):
        device = self.resolver.resolve_device(device_phrase)
        on = self.resolver.resolve_command(command_phrase)
        if device is None or on is None:
            return None
        return device, on

    def handle_uri(self, uri, acknowledge=None):
        """
        Apply a deep link like switches://control?device=kitchen&command=off.

        Returns the resolved (device, state) pair, or None when nothing changes.
        """
        if uri is None:
            return None

        if acknowledge is None:
            acknowledge = self.acknowledge_deep_links
        if acknowledge:
            self.respond()

        device_phrase = query_parameter(uri, DEVICE_SLOT)
        command_phrase = query_parameter(uri, COMMAND_SLOT)
        resolved = self.resolve(device_phrase, command_phrase)
        logger.info(f"Controller: ✅ device='{device_phrase}' command='{command_phrase}' → {resolved}")

        if resolved is not None:
            self.switchboard.post(*resolved)
        return resolved

    def handle_nlu_result(self, result):
        """
        Only the device control intent is handled, all others are logged.
        A real application should give the user more feedback than this.
        """
        if result.intent == CONTROL_DEVICE_INTENT:
            uri = build_control_uri(result.raw_slot(DEVICE_SLOT), result.raw_slot(COMMAND_SLOT))
            return self.handle_uri(uri, acknowledge=True)

        logger.info(f"Unsupported intent: {result.intent}")
        return None

    def respond(self):
        if self.tts is None:
            logger.info(f"Controller: No TTS. Cant play: {ACKNOWLEDGEMENT_TEXT}")
            return
        try:
            self.tts.synthesize(ACKNOWLEDGEMENT_TEXT)
        except Exception as e:
            logger.error(f"Controller: speech synthesis failed: {e}")
