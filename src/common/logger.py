"""Logging utilities with rich console output.

Every module gets its logger through ``get_logger(__name__)``; the CLI calls
``setup_logging`` once at startup.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Checking if feature/x needs to be built")
    logger.error("Error building SCM file system")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

console = Console()

# Set once setup_logging has configured the root logger
_root_configured = False


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=True,
        markup=False,  # file paths and glob patterns contain brackets
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers or _root_configured:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    logger.setLevel(level)
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # pytest caplog captures through propagation
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the root logger for the whole application.

    Args:
        level: Default logging level for all modules
        log_file: Optional file path to also log to a file
    """
    global _root_configured
    level = level.upper()

    # Records from module loggers now go through the root handler only
    for existing in logging.Logger.manager.loggerDict.values():
        if not isinstance(existing, logging.Logger):
            continue
        handlers = [h for h in existing.handlers if not isinstance(h, RichHandler)]
        if len(handlers) != len(existing.handlers):
            existing.handlers = handlers
            existing.setLevel(logging.NOTSET)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler())

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    _root_configured = True


def success(message: str) -> None:
    """Print a message with a green checkmark."""
    console.print(f"[green]✓[/green] {message}")


def skipped(message: str) -> None:
    """Print a message with a yellow skip marker."""
    console.print(f"[yellow]⏭[/yellow] {message}")


def error(message: str) -> None:
    """Print an error message with a red X to stderr."""
    Console(stderr=True).print(f"[red]✗[/red] {message}")
