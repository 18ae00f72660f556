# main.py

import sys
import signal

from config import *
from aliases import AliasResolver, DEVICES
from switchboard import SwitchBoard
from controller import Controller
from nlu import parse_utterance
from deep_link_server import start_server
from logger_config import get_logger, setup_queue_listener, stop_queue_listener, log_queue

"""
    Following parts are used:
    - SwitchBoard with its own UI thread for the simulated switches
    - Piper TTS (Text To Speech) for the spoken acknowledgement
    - Vosk STT (Speech To Text) + rule based NLU for voice commands
    - FastAPI server for deep links and external NLU results
"""

logger = get_logger(__name__)


def main():
    setup_queue_listener(log_queue)

    switchboard = SwitchBoard(DEVICES)
    switchboard.start()

    logger.info("-----------  Init PiperTTS  -------------------")
    try:
        from piper_tts import PiperTTS
        tts = PiperTTS(PIPER_MODEL_PATH, PIPER_EXECUTABLE)
    except Exception as e:
        logger.error(f"❌ PiperTTS unavailable, acknowledgements are logged only: {e}")
        tts = None

    controller = Controller(AliasResolver(), switchboard, tts)

    stt = None
    if ENABLE_STT:
        logger.info("-----------  Init VoskSTT  -------------------")
        try:
            from vosk_stt import VoskSTT
            stt = VoskSTT(VOSK_MODEL_PATH)
            stt.start(lambda text: controller.handle_nlu_result(parse_utterance(text)))
        except Exception as e:
            logger.error(f"❌ VoskSTT unavailable, voice input disabled: {e}")
            stt = None

    # Single function to shut everything down gracefully
    def do_shutdown():
        if getattr(do_shutdown, "_has_run", False):
            return
        do_shutdown._has_run = True

        logger.info("Shutting down gracefully...")
        if stt:
            stt.stop()
        if tts:
            tts.stop()
        switchboard.stop()
        stop_queue_listener()

    def signal_handler(sig, frame):
        logger.info(f"Received shutdown signal ({sig}). Exiting gracefully...")
        do_shutdown()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("Switches are running. Press Ctrl+C or send SIGTERM to quit.")
        start_server(controller)
    except KeyboardInterrupt:
        logger.info("Exiting by KeyboardInterrupt...")
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
    finally:
        do_shutdown()


if __name__ == "__main__":
    main()
