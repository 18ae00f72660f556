# logger_config.py

import os
import sys
import logging
import logging.handlers
from multiprocessing import Queue

from config import SYS_LOG_PATH, LOG_TO_CONSOLE, LOG_LEVEL

# Global queue shared by every logger of the app (speech threads, HTTP server, UI thread)
log_queue = Queue(-1)

# Module-level variable to track the listener instance
_listener = None

# following levels from lower to higher: (DEBUG, INFO, WARNING, ERROR, CRITICAL)
default_log_level = getattr(logging, LOG_LEVEL.upper(), logging.DEBUG)


def setup_queue_listener(log_queue, logging_file_path=None, log_level=default_log_level,
                         to_console=LOG_TO_CONSOLE):
    """Configures a QueueListener with desired handlers.

        Args:
        log_queue: The multiprocessing queue to collect log records.
        logging_file_path: Path for the file handler, defaults to <SYS_LOG_PATH>/switches.log.
        log_level: The logging level for file and console handlers.
        to_console: Also print records to stdout.

    Returns the listener instance, or None if already created.
    """
    global _listener
    if _listener is not None:
        return None  # Listener already created

    if logging_file_path is None:
        logging_file_path = os.path.join(SYS_LOG_PATH, "switches.log")
    log_dir = os.path.dirname(logging_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handlers = []

    # Always add file handler
    file_handler = logging.FileHandler(logging_file_path)
    file_handler.setFormatter(
        logging.Formatter(
            '[%(asctime)s] %(levelname)s in %(module)s: %(message)s')
    )
    file_handler.setLevel(log_level)
    handlers.append(file_handler)

    if to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter('[%(asctime)s] %(levelname)s [%(threadName)s] - %(message)s')
        )
        console_handler.setLevel(log_level)
        handlers.append(console_handler)

    _listener = logging.handlers.QueueListener(
        log_queue, *handlers, respect_handler_level=True
    )
    _listener.start()
    return _listener


def stop_queue_listener():
    """Flushes pending records and stops the listener started by setup_queue_listener()."""
    global _listener
    if _listener is None:
        return
    _listener.stop()
    _listener = None


def get_logger(name):
    """Creates a logger that sends log records to the shared queue."""
    logger = logging.getLogger(name)
    logger.setLevel(default_log_level)

    # Avoid adding duplicate handlers
    if not any(isinstance(h, logging.handlers.QueueHandler) for h in logger.handlers):
        queue_handler = logging.handlers.QueueHandler(log_queue)
        logger.addHandler(queue_handler)
    return logger
