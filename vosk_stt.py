# vosk_stt.py

import json
import threading

import pyaudio
from vosk import Model, KaldiRecognizer

from logger_config import get_logger

logger = get_logger(__name__)

SAMPLE_RATE = 16000
FRAMES_PER_BUFFER = 8000


class VoskSTT:
    def __init__(self, model_path):
        # Create model from the link to file
        self.model = Model(model_path)
        # Initialize the recognizer with the given model and sample rate
        self.recognizer = KaldiRecognizer(self.model, SAMPLE_RATE)
        self.recognizer.SetWords(True)

        self.p = pyaudio.PyAudio()
        self.stream = None
        self.thread = None
        self.running = False
        self.callback = None
        logger.info("Vosk: ✅ initialized")

    def start(self, callback=None):
        """
        Open an input stream on the default capture device and listen on a thread.
        Every final transcript is passed to callback(text).
        """
        if self.running:
            logger.info("Vosk: Already started.")
            return
        if callback is not None:
            self.callback = callback

        try:
            self.stream = self.p.open(format=pyaudio.paInt16,
                                      channels=1,
                                      rate=SAMPLE_RATE,
                                      input=True,
                                      frames_per_buffer=FRAMES_PER_BUFFER)
        except OSError as e:
            logger.error(f"❌ No audio input device available: {e}")
            return

        self.running = True
        self.thread = threading.Thread(target=self.run, name="vosk", daemon=True)
        self.thread.start()
        logger.info("Vosk: 🎙️ Listening...!")

    def run(self):
        while self.running:
            try:
                data = self.stream.read(FRAMES_PER_BUFFER, exception_on_overflow=False)
                if self.recognizer.AcceptWaveform(data):
                    result = json.loads(self.recognizer.Result())
                    text = result.get("text", "").strip()
                    if text:
                        logger.debug(f"Vosk: recognized '{text}'")
                        if self.callback:
                            self.callback(text)

            except Exception as e:
                logger.error(f"Error reading stream: {e}")
                continue

    def stop(self):
        """Stops the STT processing."""
        logger.info(f"VoskSTT: stop  running={self.running}")
        self.callback = None
        if self.running:
            self.running = False
            self.thread.join()
            if self.stream:
                self.stream.stop_stream()
                self.stream.close()
                self.stream = None
            self.p.terminate()
            logger.info("VoskSTT: 🔴 STT stopped.")
        else:
            logger.info("VoskSTT: 🔴 STT already stopped.")
