"""Sleep log schema (optional recovery-rate input)."""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SleepLog(BaseModel):
    """One night of sleep."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Night of the sleep")
    quality: float = Field(..., ge=1.0, le=10.0, description="Subjective quality 1-10")
    duration: Optional[float] = Field(
        None, ge=0.0, le=1440.0,
        description="Total sleep duration (minutes)",
    )
