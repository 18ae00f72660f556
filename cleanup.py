# cleanup.py

import os
import threading

from logger_config import get_logger

logger = get_logger(__name__)


def cleanup_wav(wav_path):
    """
    Deletes the specified WAV file.

    Args:
        wav_path (str): Path to the WAV file to delete.
    """
    logger.debug(f"cleanup_wav() curThd={threading.current_thread().name} path={wav_path}")
    try:
        if os.path.exists(wav_path):
            os.unlink(wav_path)
            logger.debug(f"Cleaned up temporary WAV file: {wav_path}")
        else:
            logger.warning(f"WAV file does not exist: {wav_path}")
    except OSError as e:
        logger.error(f"Failed to delete WAV file {wav_path}: {e}")
