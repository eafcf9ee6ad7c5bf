import logging
import sys
from typing import Optional
from pathlib import Path
from ..config import get_log_settings

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get or create logger with consistent configuration.

    Args:
        name: Logger name (usually __name__ of calling module)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or __name__)

    # Only configure if no handlers are set
    if not logger.handlers:
        settings = get_log_settings()
        log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        formatter = logging.Formatter(settings.LOG_FORMAT or DEFAULT_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

        if settings.LOG_FILE:
            try:
                log_dir = Path('logs')
                log_dir.mkdir(parents=True, exist_ok=True)
                log_path = log_dir / settings.LOG_FILE

                file_handler = logging.FileHandler(str(log_path))
                file_handler.setFormatter(formatter)
                file_handler.setLevel(log_level)
                logger.addHandler(file_handler)
                logger.debug(f"Log file path: {log_path.absolute()}")
            except OSError as e:
                # Console logging keeps working if the file cannot be opened
                logger.error(f"Error configuring file logger: {str(e)}")

        logger.setLevel(log_level)

    return logger
