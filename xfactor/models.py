"""Data models for jobs and xfactor configuration."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

# Neutral midpoint of the host's priority adjustment range.
NICE_OFFSET = 0x80000000


class JobState(str, Enum):
    """Job lifecycle states as reported by the host."""
    PENDING = "pending"
    RUNNING = "running"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ElapsedUnit(str, Enum):
    """Unit the elapsed accrual time is expressed in before dividing."""
    MINUTES = "minutes"
    SECONDS = "seconds"


class JobView(BaseModel):
    """The slice of a host job the site factor plugin reads and writes."""
    id: str
    state: JobState = JobState.PENDING
    accrue_time: Optional[datetime] = None
    time_limit: Optional[int] = Field(default=None, ge=0)  # minutes, None = unset
    partition_max_time: Optional[int] = Field(default=None, ge=0)  # minutes, None = unlimited
    site_factor: int = 0

    @field_validator("accrue_time", mode="before")
    @classmethod
    def _unset_epoch(cls, value):
        # An accrue time of 0 means the host never started accruing.
        if value == 0:
            return None
        return value

    @field_validator("accrue_time")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_pending(self) -> bool:
        return self.state == JobState.PENDING


class XFactorConfig(BaseModel):
    """Tunable xfactor parameters."""
    min_time: int = Field(default=1, ge=1)  # minimum time limit in minutes
    max_factor: int = Field(default=NICE_OFFSET, ge=0)  # ceiling of the weighted factor
    weight: int = Field(default=1, ge=0)
