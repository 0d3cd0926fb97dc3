"""Porefect CLI domain models.

Pydantic models for the scheduling entities exchanged with the Porefect API
and for the CLI's own configuration.
"""

from .config_models import APIConfig, Config, OutputConfig, UIConfig
from .core import (
    ALL_DAYS,
    CompletionRecord,
    Routine,
    Schedule,
    Task,
    TaskCreate,
    TaskType,
    UserSession,
)

__all__ = [
    # Scheduling models
    "ALL_DAYS",
    "Task",
    "TaskCreate",
    "TaskType",
    "Schedule",
    "Routine",
    "CompletionRecord",
    "UserSession",
    # Configuration models
    "Config",
    "APIConfig",
    "OutputConfig",
    "UIConfig",
]
