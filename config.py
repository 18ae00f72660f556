# config.py

import os

# ---- Voice intent handled by the device controller
CONTROL_DEVICE_INTENT = "command.control_device"
DEVICE_SLOT = "device"
COMMAND_SLOT = "command"

# spoken after every voice-originated command
ACKNOWLEDGEMENT_TEXT = "Got it!"

# App Action deep links arrive via the voice assistant, so they are acknowledged too
ACK_DEEP_LINKS = os.getenv("ACK_DEEP_LINKS", "1") not in ("0", "false", "False")

# ---- HTTP server for deep links
HTTP_HOST = os.getenv("HTTP_HOST", "0.0.0.0")
HTTP_PORT = int(os.getenv("HTTP_PORT", "5000"))

# system folders
SYS_LOG_PATH = os.getenv("SYS_LOG_PATH", "log/")
LOG_TO_CONSOLE = os.getenv("LOG_TO_CONSOLE", "1") not in ("0", "false", "False")
# DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# ---- TTS PIPER
# Piper project: https://github.com/rhasspy/piper
PIPER_EXECUTABLE = os.getenv("PIPER_EXECUTABLE", "/data/programs/piper/piper")
# Voices to download: https://github.com/rhasspy/piper/blob/master/VOICES.md
PIPER_MODEL_PATH = os.getenv("PIPER_MODEL_PATH", "/data/models/piper/en_GB-jenny_dioco-medium.onnx")

# ---- STT Vosk
# Vosk project: https://alphacephei.com/vosk/
# Models to download: https://alphacephei.com/vosk/models
ENABLE_STT = os.getenv("ENABLE_STT", "1") not in ("0", "false", "False")
VOSK_MODEL_PATH = os.getenv("VOSK_MODEL_PATH", "/data/models/vosk/vosk-model-small-en-us-0.15")
# Big US English model with dynamic graph
# VOSK_MODEL_PATH = os.getenv("VOSK_MODEL_PATH", "/data/models/vosk/vosk-model-en-us-0.22-lgraph")
