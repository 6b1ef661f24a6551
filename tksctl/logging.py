"""Logging configuration for the tksctl package."""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Libraries that are too chatty below WARNING
NOISY_LOGGERS = ("grpc", "grpc._channel", "grpc._cython")


def resolve_level(debug_mode: bool = False) -> int:
    """Pick the root log level from --debug or TKS_LOG_LEVEL."""
    if debug_mode:
        return logging.DEBUG
    level = logging.getLevelName(os.getenv("TKS_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(debug_mode: bool = False) -> None:
    """
    Configure logging for a CLI invocation.

    Log records go to stderr so that stdout carries only command output.

    Args:
        debug_mode: Log everything at DEBUG, including gRPC internals
    """
    logging.basicConfig(
        level=resolve_level(debug_mode),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )
    # Disable debug logging for noisy libraries
    if not debug_mode:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
