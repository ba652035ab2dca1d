"""Validated run options for the CHIP-8 core."""

from typing import Optional

from pydantic import BaseModel, Field


class RunOptions(BaseModel):
    """Options for a headless run."""
    instructions_per_tick: int = Field(default=4, ge=1, le=1000)
    seed: Optional[int] = None
    trace: bool = False
    trace_limit: int = Field(default=10000, ge=1)
