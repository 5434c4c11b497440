"""
Logging configuration for CiteMatch.

Handles setup of file and console logging with appropriate formatters.
"""

import os
import time
import logging


def setup_logging(verbose: bool = False, log_dir: str = "logs") -> str:
    """
    Configure logging with file output and optional console output.

    Args:
        verbose: If True, enable console logging at DEBUG level
        log_dir: Directory for log files

    Returns:
        Path to the created log file
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = time.strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"citematch_{timestamp}.log")

    # Clear any existing handlers
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.DEBUG)

    # File handler - always at DEBUG level
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(file_handler)

    # Console handler - only if verbose
    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        root_logger.addHandler(console_handler)

    return log_file
