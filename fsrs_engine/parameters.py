"""
Parameters - FSRS Parameter Store

Holds the 17 model weights, the target retention, the interval cap and
the fuzz toggle. Instances are frozen so one set of parameters can be
shared between any number of scheduling calls.

Parameters can be built directly or loaded from the environment:

    params = Parameters(request_retention=0.85, enable_fuzz=True)
    params = Parameters.from_env()  # FSRS_* variables, .env supported
"""

from __future__ import annotations

import logging
import os
from typing import Any, Tuple

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fsrs_engine.constants import (
    DECAY,
    DEFAULT_ENABLE_FUZZ,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_WEIGHTS,
    FACTOR,
    WEIGHT_COUNT,
)
from fsrs_engine.exceptions import InvalidConfig

logger = logging.getLogger(__name__)


class Parameters(BaseModel):
    """Configuration for the scheduling engine."""

    model_config = ConfigDict(frozen=True)

    request_retention: float = Field(
        DEFAULT_REQUEST_RETENTION,
        gt=0,
        lt=1,
        description="Target probability of recall when a card comes due",
    )
    maximum_interval: int = Field(
        DEFAULT_MAXIMUM_INTERVAL,
        ge=1,
        description="Upper bound for any scheduled interval, in days",
    )
    weights: Tuple[float, ...] = Field(DEFAULT_WEIGHTS)
    enable_fuzz: bool = DEFAULT_ENABLE_FUZZ

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidConfig(f"Invalid FSRS parameters: {exc}") from exc

    @field_validator("weights")
    @classmethod
    def _check_weight_count(cls, value: Tuple[float, ...]) -> Tuple[float, ...]:
        if len(value) != WEIGHT_COUNT:
            raise ValueError(
                f"Weights length must be {WEIGHT_COUNT}, got {len(value)}"
            )
        return value

    @property
    def interval_modifier(self) -> float:
        """Scale from stability to interval: request_retention^(1/DECAY) / FACTOR."""
        return self.request_retention ** (1 / DECAY) / FACTOR

    @classmethod
    def from_env(cls) -> Parameters:
        """
        Build parameters from FSRS_* environment variables.

        Reads (after loading a .env file found from the working directory):
            FSRS_REQUEST_RETENTION: float in (0, 1)
            FSRS_MAXIMUM_INTERVAL: positive integer, days
            FSRS_WEIGHTS: 17 comma-separated floats
            FSRS_ENABLE_FUZZ: "true" / "false"

        Unset variables keep their defaults.

        Raises:
            InvalidConfig: If any variable is malformed
        """
        load_dotenv(find_dotenv(usecwd=True))

        data: dict[str, Any] = {}

        retention = os.getenv("FSRS_REQUEST_RETENTION")
        if retention:
            data["request_retention"] = retention

        maximum_interval = os.getenv("FSRS_MAXIMUM_INTERVAL")
        if maximum_interval:
            data["maximum_interval"] = maximum_interval

        weights = os.getenv("FSRS_WEIGHTS")
        if weights:
            data["weights"] = [w.strip() for w in weights.split(",") if w.strip()]

        enable_fuzz = os.getenv("FSRS_ENABLE_FUZZ")
        if enable_fuzz:
            data["enable_fuzz"] = enable_fuzz.strip().lower()

        params = cls(**data)
        logger.info(
            "Loaded FSRS parameters from environment (retention=%s, max_interval=%s, fuzz=%s)",
            params.request_retention,
            params.maximum_interval,
            params.enable_fuzz,
        )
        return params


DEFAULT_PARAMETERS = Parameters()
