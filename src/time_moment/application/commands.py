from __future__ import annotations

import math
import re
from typing import Literal, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

_EPOCH_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class NowInput(BaseModel):
    kind: Literal["now"] = "now"


class EpochInput(BaseModel):
    kind: Literal["epoch"] = "epoch"
    seconds: Union[StrictInt, StrictFloat]

    @field_validator("seconds")
    @classmethod
    def validate_finite(cls, seconds: Union[int, float]) -> Union[int, float]:
        if isinstance(seconds, float) and not math.isfinite(seconds):
            raise ValueError("epoch seconds must be finite")
        return seconds


class DateTimeStringInput(BaseModel):
    kind: Literal["string"] = "string"
    text: str = Field(..., min_length=1)


MomentInput = Union[NowInput, EpochInput, DateTimeStringInput]


def to_moment_input(value: object = None) -> MomentInput:
    """Bind a helper argument to the input variant it stands for."""
    if isinstance(value, (NowInput, EpochInput, DateTimeStringInput)):
        return value
    if value is None:
        return NowInput()
    if isinstance(value, bool):
        raise TypeError("tm() does not accept booleans")
    if isinstance(value, (int, float)):
        return EpochInput(seconds=value)
    if isinstance(value, str):
        return parse_command_text(value)
    raise TypeError(f"tm() expects an epoch number or a date-time string, got {type(value).__name__}")


def parse_command_text(text: str) -> MomentInput:
    """Bind free text (a slash command or a payload field): blank, an epoch literal or a date-time string."""
    text = (text or "").strip()
    if not text:
        return NowInput()
    if _EPOCH_TEXT.match(text):
        if re.fullmatch(r"[+-]?\d+", text):
            return EpochInput(seconds=int(text))
        return EpochInput(seconds=float(text))
    return DateTimeStringInput(text=text)
