"""Persisted configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .cycling import TimerSettings


class TimerConfig(BaseModel):
    """Default phase lengths, in minutes, and cycles per long break."""

    cycles: int = Field(default=4, gt=0, description="Work sessions per long break")
    work_minutes: int = Field(default=25, gt=0)
    short_break_minutes: int = Field(default=5, gt=0)
    long_break_minutes: int = Field(default=30, gt=0)

    def to_settings(self) -> TimerSettings:
        """Convert to engine settings (seconds)."""
        return TimerSettings.from_minutes(
            cycles=self.cycles,
            work_minutes=self.work_minutes,
            short_break_minutes=self.short_break_minutes,
            long_break_minutes=self.long_break_minutes,
        )


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main pmon configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
