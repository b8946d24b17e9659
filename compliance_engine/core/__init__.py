"""Core configuration, logging and ontology."""

from .config import Settings, get_settings
from .logging_config import configure_logging, get_run_id, run_context, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_run_id",
    "run_context",
    "setup_logging",
]
