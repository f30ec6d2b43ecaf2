"""
Module: result.py
Description: Outcome of a single delivery attempt.

Key Components:
- DeliveryOutcome: Enum of attempt end states
- DeliveryResult: What deliver() hands back to the host
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeliveryOutcome(str, Enum):
    """
    End state of one delivery attempt.

    ACCEPTED: endpoint answered 2xx
    REJECTED: endpoint answered non-2xx; chunk discarded
    GATED: rate limiter suppressed the attempt; chunk discarded
    FAILED: transport failure swallowed because raise_on_error is off
    EMPTY: chunk held no records; nothing attempted
    """

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    GATED = "gated"
    FAILED = "failed"
    EMPTY = "empty"


class DeliveryResult(BaseModel):
    """
    Result returned to the host for a handled chunk.

    Attributes:
        outcome: End state of the attempt
        status_code: HTTP status when an exchange completed
        error: Description of a swallowed transport failure
    """

    model_config = ConfigDict(frozen=True)

    outcome: DeliveryOutcome
    status_code: Optional[int] = Field(default=None)
    error: Optional[str] = Field(default=None)

    @property
    def delivered(self) -> bool:
        return self.outcome is DeliveryOutcome.ACCEPTED

