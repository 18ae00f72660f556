import logging

from aliases import AliasResolver, OFFICE_LIGHT, KITCHEN_LIGHT, OFFICE_FAN
from controller import Controller, build_control_uri, query_parameter
from nlu import NLUResult, Slot


def control_result(intent="command.control_device", **slots):
    return NLUResult(intent, {name: Slot(name, raw) for name, raw in slots.items()})


def test_resolve_returns_pair(controller):
    assert controller.resolve("kitchen", "off") == (KITCHEN_LIGHT, False)
    assert controller.resolve("fan", "spin") == (OFFICE_FAN, True)
    assert controller.resolve("garage", "on") is None
    assert controller.resolve("office", None) is None


def test_deep_link_turns_kitchen_off(controller, switchboard):
    switchboard.apply(KITCHEN_LIGHT, True)
    switchboard.apply(OFFICE_LIGHT, True)

    resolved = controller.handle_uri("switches://control?device=kitchen&command=off")

    assert resolved == (KITCHEN_LIGHT, False)
    assert switchboard.states() == {OFFICE_LIGHT: True, KITCHEN_LIGHT: False, OFFICE_FAN: False}


def test_deep_link_without_command_changes_nothing(controller, switchboard):
    assert controller.handle_uri("switches://control?device=office%20fan") is None
    assert not any(switchboard.states().values())


def test_deep_link_with_unknown_device_changes_nothing(controller, switchboard):
    assert controller.handle_uri("switches://control?device=garage&command=on") is None
    assert not any(switchboard.states().values())


def test_missing_uri_is_ignored(controller, tts):
    assert controller.handle_uri(None, acknowledge=True) is None
    assert tts.spoken == []


def test_deep_link_acknowledgement_is_configurable(switchboard, tts):
    ctrl = Controller(AliasResolver(), switchboard, tts, acknowledge_deep_links=True)
    ctrl.handle_uri("switches://control?device=fan&command=on")
    assert tts.spoken == ["Got it!"]


def test_voice_unmatched_command_defaults_to_on(controller, switchboard, tts):
    resolved = controller.handle_nlu_result(control_result(device="office", command="xyz"))

    assert resolved == (OFFICE_LIGHT, True)
    assert switchboard.is_checked(OFFICE_LIGHT)
    assert tts.spoken == ["Got it!"]


def test_voice_acknowledges_even_when_nothing_resolves(controller, switchboard, tts):
    assert controller.handle_nlu_result(control_result(device="garage", command="on")) is None
    assert controller.handle_nlu_result(control_result(device="office fan")) is None
    assert tts.spoken == ["Got it!", "Got it!"]
    assert not any(switchboard.states().values())


def test_voice_null_raw_value_is_absent(controller, switchboard):
    result = NLUResult("command.control_device", {
        "device": Slot("device", "kitchen"),
        "command": Slot("command", None),
    })
    assert controller.handle_nlu_result(result) is None
    assert not switchboard.is_checked(KITCHEN_LIGHT)


def test_unsupported_intent_is_logged_only(controller, switchboard, tts, caplog):
    caplog.set_level(logging.INFO)

    assert controller.handle_nlu_result(control_result("some.other.intent", device="office", command="on")) is None

    assert tts.spoken == []
    assert not any(switchboard.states().values())
    assert any(r.levelno == logging.INFO and "Unsupported intent: some.other.intent" in r.getMessage()
               for r in caplog.records)


def test_synthesis_failure_does_not_block_update(switchboard):
    class BrokenTTS:
        def synthesize(self, text):
            raise RuntimeError("no speaker")

    ctrl = Controller(AliasResolver(), switchboard, BrokenTTS())
    assert ctrl.handle_nlu_result(control_result(device="fan", command="on")) == (OFFICE_FAN, True)
    assert switchboard.is_checked(OFFICE_FAN)


def test_control_uri_keeps_slots_verbatim():
    uri = build_control_uri("office fan", "off")
    assert query_parameter(uri, "device") == "office fan"
    assert query_parameter(uri, "command") == "off"


def test_control_uri_omits_absent_slots():
    uri = build_control_uri("kitchen", None)
    assert query_parameter(uri, "command") is None


def test_empty_parameter_is_present():
    assert query_parameter("switches://control?device=fan&command=", "command") == ""
