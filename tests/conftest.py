import pytest

from aliases import AliasResolver, DEVICES
from switchboard import SwitchBoard
from controller import Controller
from logger_config import log_queue, setup_queue_listener, stop_queue_listener


@pytest.fixture(autouse=True, scope="session")
def drain_log_queue(tmp_path_factory):
    setup_queue_listener(log_queue, str(tmp_path_factory.mktemp("log") / "switches.log"), to_console=False)
    yield
    stop_queue_listener()


class FakeTTS:
    def __init__(self):
        self.spoken = []

    def synthesize(self, text):
        self.spoken.append(text)


@pytest.fixture
def tts():
    return FakeTTS()


@pytest.fixture
def switchboard():
    return SwitchBoard(DEVICES)


@pytest.fixture
def controller(switchboard, tts):
    return Controller(AliasResolver(), switchboard, tts, acknowledge_deep_links=False)
