"""
Logging setup for RippleRadar
"""

import logging
import os
import time
from typing import Optional

from rippleradar.config import Config

logger = logging.getLogger(__name__)


def setup_logging(config: Config, log_level: Optional[str] = None) -> Optional[str]:
    """
    Set up the root logger

    Args:
        config: Configuration providing log_level and log_dir
        log_level: Overrides config.log_level when given

    Returns:
        Path of the log file, or None when logging only to the console
    """
    level_name = (log_level or config.log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(console_handler)

    if not config.log_dir:
        return None

    # Add file handler
    os.makedirs(config.log_dir, exist_ok=True)
    log_file = os.path.join(config.log_dir, f"rippleradar_{time.strftime('%Y%m%d_%H%M%S')}.log")
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(file_handler)

    logger.info(f"Logging to {log_file}")
    return log_file
