"""Logging setup."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "noddy"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | int = "WARNING", log_file: Path | str | None = None) -> logging.Logger:
    """
    Configure the ``noddy`` logger hierarchy.
    
    Installs a Rich handler on stderr and, when ``log_file`` is given, a
    plain file handler. Calling it again replaces previously installed
    handlers.
    
    Args:
        level: Level name or number for the noddy loggers
        log_file: Optional file receiving every record at the same level
    
    Returns:
        The configured root ``noddy`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    logger.propagate = False
    
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)
    
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
    
    return logger
