"""Logging setup for local runs and GitHub Actions runners."""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "branch_commit"

_WORKFLOW_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands (::debug::, ::error::)."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = _WORKFLOW_COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_command_data(message)}"


def configure_logging(
    debug: bool = False, actions: bool = False, stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Inside Actions every record is emitted, debug included; the runner only
    shows ::debug:: lines when step debugging is enabled.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    if actions:
        handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug or actions else logging.INFO)
    logger.propagate = False
    return logger
