import logging
from typing import Optional

from .settings import ServerSettings


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure root logging for the service and return the package logger.
    """
    logging.basicConfig(level=level.upper(), format=log_format)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

    return logging.getLogger("bhashaantar")


def setup_logging_from_settings(cfg: ServerSettings) -> logging.Logger:
    return setup_logging(level=cfg.log_level, log_format=cfg.log_format, log_file=cfg.log_file)
