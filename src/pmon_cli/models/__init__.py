"""Domain models for the pmon timer."""

from .accounting import Summary, compute_summary, format_summary, split_duration
from .config_models import AppConfig, OutputConfig, TimerConfig
from .cycling import ConfigurationError, Phase, RunState, TimerSettings, next_phase

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "OutputConfig",
    "Phase",
    "RunState",
    "Summary",
    "TimerConfig",
    "TimerSettings",
    "compute_summary",
    "format_summary",
    "next_phase",
    "split_duration",
]
