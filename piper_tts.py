# piper_tts.py

import os
import time
import wave
import tempfile
import threading
import subprocess

from config import PIPER_EXECUTABLE
from cleanup import cleanup_wav
from logger_config import get_logger

# Must be set BEFORE importing pyaudio or opening the stream
os.environ["PULSE_PROP_application.name"] = "PiperTTS"
os.environ["PULSE_PROP_media.name"] = "Piper TTS Playback"

import pyaudio  # noqa: E402

logger = get_logger(__name__)


class PiperTTS:
    def __init__(self, model_path="/path/to/model.onnx", executable=PIPER_EXECUTABLE):
        """
        Manages Piper TTS using PyAudio for playback.

        Args:
            model_path (str): Path to the Piper TTS model (.onnx).
            executable (str): Path to the piper binary.
        """
        self.model_path = model_path
        self.executable = executable

        self.p = pyaudio.PyAudio()
        # one utterance at a time on the speaker
        self.play_lock = threading.Lock()
        self.running = True

        logger.info("PiperTTS: ✅ initialized")

    def synthesize(self, text):
        """
        Fire-and-forget: render and play text on a worker thread.
        """
        if not self.running:
            logger.info("PiperTTS: Not running.")
            return

        play_thd = threading.Thread(target=self.play_tts, args=(text,), daemon=True)
        play_thd.start()

    def stop(self):
        """
        Release PyAudio resources.
        """
        if self.running:
            self.running = False
            with self.play_lock:
                self.p.terminate()
            logger.info("PiperTTS: 🔴 TTS stopped.")
        else:
            logger.info("PiperTTS: Already stopped.")

    def play_tts(self, tts_text):
        logger.info(f"PiperTTS:  🔊 play: '{tts_text}'")
        time_begin = time.time()
        wav_file = self.generate_tts_wav(tts_text)
        if not wav_file:
            logger.error("PiperTTS: generation failed; skipping playback.")
            return

        try:
            with self.play_lock:
                if not self.running:
                    return
                with wave.open(wav_file, 'rb') as wf:
                    stream_out = self.p.open(format=self.p.get_format_from_width(wf.getsampwidth()),
                                             channels=wf.getnchannels(),
                                             rate=wf.getframerate(),
                                             output=True)
                    try:
                        data = wf.readframes(1024)
                        while data:
                            stream_out.write(data)
                            data = wf.readframes(1024)
                    finally:
                        stream_out.stop_stream()
                        stream_out.close()
            logger.debug(f"PiperTTS: played '{tts_text}' in {time.time() - time_begin:.2f}s")

        except wave.Error as we:
            logger.error(
                f"[Exception] Wave error while reading WAV file: {we}")
        except Exception as e:
            logger.error(
                f"[Exception] Unexpected error while playing TTS response: {e}")
        finally:
            cleanup_wav(wav_file)

    def generate_tts_wav(self, text):
        """
        Generate a WAV file from text using Piper TTS.

        Args:
            text (str): The text to convert to speech.

        Returns:
            str or None: Path to the generated WAV file, or None if generation failed.
        """
        # Audio parameters
        sample_rate = 22050  # Hz         piper medium voices output this rate
        sample_width = 2     # bytes (16-bit)
        channels = 1         # Mono

        tmp_wav = tempfile.NamedTemporaryFile(suffix=".wav", delete=False)
        tmp_wav_path = tmp_wav.name
        tmp_wav.close()

        try:
            cmd = [
                self.executable,
                "--model", self.model_path,
                "--output-raw"
            ]

            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE
            )

            raw_audio, stderr = proc.communicate(input=text.encode('utf-8'))

            if proc.returncode != 0:
                error_message = stderr.decode().strip()
                logger.error(f"Piper error: {error_message}")
                os.unlink(tmp_wav_path)
                return None

            # Write raw audio data to WAV file with proper headers
            with wave.open(tmp_wav_path, 'wb') as wav_file:
                wav_file.setnchannels(channels)
                wav_file.setsampwidth(sample_width)
                wav_file.setframerate(sample_rate)
                wav_file.writeframes(raw_audio)

            return tmp_wav_path

        except Exception as e:
            logger.error(f"Error generating TTS file: {e}")
            if os.path.exists(tmp_wav_path):
                os.unlink(tmp_wav_path)
            return None
