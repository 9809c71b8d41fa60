import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(name)s - %(levelname)s - %(message)s'


def create_isolated_logger(
    name: str,
    level: int = logging.ERROR,
    file_path: Optional[str] = None,
    console: bool = True,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Create a logger detached from the root logger.

    Messages never reach stdout: the console handler writes to stderr, as
    stdout may carry the generated Go source.

    Parameters
    ----------
    name : str
        The logger name, `tracegen` or one of its children
    level : int, optional
        The minimum level of the emitted records, by default `logging.ERROR`
    file_path : str, optional
        Also append the records to this file
    console : bool, optional
        Write the records to stderr, by default True
    log_format : str, optional
        The `logging.Formatter` format string

    Returns
    -------
    logging.Logger
        The configured logger. Handlers added by a previous call with the
        same name are replaced.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if file_path is not None:
        handlers.append(logging.FileHandler(file_path))
    if not handlers:
        handlers.append(logging.NullHandler())

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def create_null_logger(name: str) -> logging.Logger:
    """Create a logger discarding every record, used when no logger is injected."""
    return create_isolated_logger(name=name, console=False)
