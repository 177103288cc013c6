"""Core Onboard utilities.

This module exports core utilities for use throughout the application.
"""

from onboard.core.config import Settings, get_settings
from onboard.core.errors import (
    CollaboratorError,
    OnboardingError,
    UniquenessViolationError,
)
from onboard.core.logging import configure_logging, get_logger, workflow_context

__all__ = [
    "CollaboratorError",
    "OnboardingError",
    "Settings",
    "UniquenessViolationError",
    "configure_logging",
    "get_logger",
    "get_settings",
    "workflow_context",
]
