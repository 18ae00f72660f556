import time

import anyio
import httpx
import pytest
from fastapi.testclient import TestClient

import deep_link_server
from aliases import AliasResolver, DEVICES, KITCHEN_LIGHT, OFFICE_LIGHT, OFFICE_FAN
from controller import Controller
from switchboard import SwitchBoard


@pytest.fixture
def client(controller):
    deep_link_server.set_controller(controller)
    yield TestClient(deep_link_server.app)
    deep_link_server.set_controller(None)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def test_control_deep_link(client):
    response = client.get("/control", params={"device": "kitchen", "command": "on"})
    assert response.status_code == 200
    body = response.json()
    assert body["resolved"] == {"device": KITCHEN_LIGHT, "on": True}
    assert body["states"][KITCHEN_LIGHT] is True
    assert body["states"][OFFICE_LIGHT] is False


def test_control_without_command(client):
    body = client.get("/control", params={"device": "office fan"}).json()
    assert body["resolved"] is None
    assert body["states"][OFFICE_FAN] is False


def test_nlu_result(client, tts):
    response = client.post("/nlu", json={
        "intent": "command.control_device",
        "slots": {"device": {"rawValue": "office"}, "command": {"rawValue": "xyz"}},
    })
    assert response.json()["resolved"] == {"device": OFFICE_LIGHT, "on": True}
    assert tts.spoken == ["Got it!"]


def test_nlu_snake_case_and_plain_slots(client, switchboard):
    switchboard.apply(KITCHEN_LIGHT, True)
    body = client.post("/nlu", json={
        "intent": "command.control_device",
        "slots": {"device": "kitchen", "command": {"raw_value": "off"}},
    }).json()
    assert body["resolved"] == {"device": KITCHEN_LIGHT, "on": False}
    assert body["states"][KITCHEN_LIGHT] is False


def test_nlu_null_slot_is_absent(client):
    body = client.post("/nlu", json={
        "intent": "command.control_device",
        "slots": {"device": "kitchen", "command": None},
    }).json()
    assert body["resolved"] is None


def test_nlu_unsupported_intent(client, tts):
    body = client.post("/nlu", json={"intent": "some.other.intent"}).json()
    assert body["resolved"] is None
    assert tts.spoken == []


def test_nlu_requires_intent(client):
    assert client.post("/nlu", json={"slots": {}}).status_code == 422


def test_devices(client):
    client.get("/control", params={"device": "fan", "command": "on"})
    assert client.get("/devices").json() == {OFFICE_LIGHT: False, KITCHEN_LIGHT: False, OFFICE_FAN: True}


def test_not_ready():
    deep_link_server.set_controller(None)
    assert TestClient(deep_link_server.app).get("/devices").status_code == 503


@pytest.mark.anyio
async def test_waiting_for_ui_keeps_event_loop_responsive(tts):
    board = SwitchBoard(DEVICES)
    board.start()
    deep_link_server.set_controller(Controller(AliasResolver(), board, tts))
    gaps = []
    done = anyio.Event()

    async def heartbeat():
        last = time.monotonic()
        while not done.is_set():
            await anyio.sleep(0.02)
            now = time.monotonic()
            gaps.append(now - last)
            last = now

    try:
        board.run_on_ui(lambda: time.sleep(0.5))
        transport = httpx.ASGITransport(app=deep_link_server.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            async with anyio.create_task_group() as tg:
                tg.start_soon(heartbeat)
                response = await ac.get("/devices")
                done.set()
    finally:
        board.stop()
        deep_link_server.set_controller(None)

    assert response.status_code == 200
    assert max(gaps) < 0.2
