# switchboard.py

import queue
import threading

from logger_config import get_logger

logger = get_logger(__name__)


class Switch:
    def __init__(self, device, checked=False):
        self.device = device
        self.checked = checked

    def set_checked(self, checked):
        if self.checked == checked:
            return False    # in case switch is already in this state
        self.checked = checked
        return True


class SwitchBoard:
    def __init__(self, devices):
        """
        Simulated on-screen toggles, one per device, all off.

        Every mutation goes through run_on_ui(). Once start() is called the
        switches are owned by a single UI thread and updates from other
        threads are queued onto it.
        """
        self.switches = {device: Switch(device) for device in devices}
        self.ui_queue = queue.Queue()
        self.thread = None
        self.running = False
        # guards running together with the queue, so nothing lands behind the stop sentinel
        self.lock = threading.Lock()

    def start(self):
        if self.running:
            logger.info("SwitchBoard: Already started.")
            return
        self.running = True
        self.thread = threading.Thread(target=self.run, name="ui", daemon=True)
        self.thread.start()
        logger.info("SwitchBoard: ✅ UI thread started")

    def run(self):
        while True:
            task = self.ui_queue.get()
            try:
                if task is None:
                    return
                task()
            except Exception as e:
                logger.error(f"SwitchBoard: UI update failed: {e}")
            finally:
                self.ui_queue.task_done()

    def stop(self):
        if not self.running:
            logger.info("SwitchBoard: Already stopped.")
            return
        with self.lock:
            self.running = False
            self.ui_queue.put(None)
        self.thread.join()
        self.thread = None
        logger.info("SwitchBoard: 🔴 UI thread stopped")

    def is_ui_thread(self):
        return self.thread is None or threading.current_thread() is self.thread

    def run_on_ui(self, task):
        with self.lock:
            if self.running and not self.is_ui_thread():
                self.ui_queue.put(task)
                return
        task()

    def wait_idle(self):
        """Blocks until every queued UI update has been applied."""
        if self.running and not self.is_ui_thread():
            self.ui_queue.join()

    def apply(self, device, on):
        """Sets the device's switch, only when both device and state are resolved."""
        if device is None or on is None:
            return
        switch = self.switches.get(device)
        if switch is None:
            logger.warning(f"SwitchBoard: no switch for device={device}")
            return
        if switch.set_checked(on):
            logger.info(f"SwitchBoard: {device} → {'ON' if on else 'OFF'}")
        else:
            logger.debug(f"SwitchBoard: {device} already {'ON' if on else 'OFF'}")

    def post(self, device, on):
        self.run_on_ui(lambda: self.apply(device, on))

    def is_checked(self, device):
        return self.switches[device].checked

    def states(self):
        return {device: switch.checked for device, switch in self.switches.items()}
