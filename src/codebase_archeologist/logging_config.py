"""
Logging configuration for Codebase Archeologist.

Routes log records through a rich handler on stderr so scan diagnostics never
mix with a JSON report written to stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "codebase_archeologist"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for codebase_archeologist
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    # Replace rather than stack handlers when called once per scan.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(handler.formatter or logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'codebase_archeologist.pipeline')
              If None, returns the root codebase_archeologist logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
