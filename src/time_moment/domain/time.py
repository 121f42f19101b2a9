from __future__ import annotations

import calendar
import math
import time
from datetime import datetime, timedelta, timezone
from typing import Union

from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

_LOCAL_ORIGIN = datetime(1970, 1, 1)
_UTC_ORIGIN = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 0001-01-01T00:00:00 and 9999-12-31T23:59:59 as local seconds.
MIN_LOCAL_SECONDS = -62135596800
MAX_LOCAL_SECONDS = 253402300799
MAX_OFFSET_MINUTES = 18 * 60

Seconds = Union[int, float]


class TimeMomentError(Exception):
    pass


class InstantParseError(TimeMomentError, ValueError):
    pass


def local_offset_minutes(epoch: int) -> int:
    """Offset in minutes of the host's local zone at ``epoch``.

    The local calendar fields for the instant are reinterpreted as UTC; the
    difference from the real instant is the offset in effect at that moment,
    so daylight-saving transitions are honoured.
    """
    local_fields = time.localtime(epoch)
    return int((calendar.timegm(local_fields) - epoch) / 60)


class Instant(BaseModel):
    """An immutable point in time with an attached display offset."""

    epoch: int
    nanosecond: int = Field(default=0, ge=0, le=999_999_999)
    offset: int = Field(default=0, ge=-MAX_OFFSET_MINUTES, le=MAX_OFFSET_MINUTES)
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_range(self) -> "Instant":
        local_seconds = self.epoch + self.offset * 60
        if not MIN_LOCAL_SECONDS <= local_seconds <= MAX_LOCAL_SECONDS:
            raise ValueError("instant is outside the range 0001-01-01 to 9999-12-31")
        return self

    # Constructors ------------------------------------------------------------

    @classmethod
    def now(cls) -> "Instant":
        instant = cls.now_utc()
        return instant.with_offset_same_instant(local_offset_minutes(instant.epoch))

    @classmethod
    def now_utc(cls) -> "Instant":
        seconds, nanosecond = divmod(time.time_ns(), 1_000_000_000)
        return cls(epoch=seconds, nanosecond=nanosecond)

    @classmethod
    def from_epoch(cls, seconds: Seconds) -> "Instant":
        """Instant at ``seconds`` past the Unix epoch, with a UTC offset."""
        if isinstance(seconds, int):
            return cls(epoch=seconds)
        if not math.isfinite(seconds):
            raise ValueError(f"epoch must be finite, got {seconds!r}")
        whole = math.floor(seconds)
        nanosecond = round((seconds - whole) * 1_000_000_000)
        if nanosecond >= 1_000_000_000:
            whole += 1
            nanosecond -= 1_000_000_000
        return cls(epoch=whole, nanosecond=nanosecond)

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Instant":
        if moment.tzinfo is None or moment.utcoffset() is None:
            raise ValueError("datetime must be timezone-aware")
        delta = moment - _UTC_ORIGIN
        return cls(
            epoch=delta.days * 86400 + delta.seconds,
            nanosecond=delta.microseconds * 1000,
            offset=int(moment.utcoffset().total_seconds() / 60),
        )

    @classmethod
    def from_string(cls, text: str) -> "Instant":
        """Parse an ISO 8601 date-time carrying an offset, e.g. ``2016-06-09T09:37:42-05``."""
        try:
            moment = isoparse(text)
        except (ValueError, OverflowError) as exc:
            raise InstantParseError(f"Could not parse date-time string {text!r}: {exc}") from exc
        if moment.tzinfo is None:
            raise InstantParseError(f"Date-time string {text!r} has no UTC offset")
        try:
            return cls.from_datetime(moment)
        except ValidationError as exc:
            raise InstantParseError(f"Date-time string {text!r} is out of range: {exc}") from exc

    @classmethod
    def then(cls, seconds: Seconds) -> "Instant":
        """Instant at the epoch ``seconds`` with the local zone's offset at that time."""
        instant = cls.from_epoch(seconds)
        return instant.with_offset_same_instant(local_offset_minutes(instant.epoch))

    @classmethod
    def dts(cls, text: str) -> "Instant":
        """Parse ``text`` and replace its offset with the local zone's offset."""
        instant = cls.from_string(text)
        return instant.with_offset_same_instant(local_offset_minutes(instant.epoch))

    # Local fields ------------------------------------------------------------

    def _local(self) -> datetime:
        return _LOCAL_ORIGIN + timedelta(seconds=self.epoch + self.offset * 60)

    def _with_local(self, local: datetime, nanosecond: int) -> "Instant":
        delta = local - _LOCAL_ORIGIN
        local_seconds = delta.days * 86400 + delta.seconds
        return Instant(epoch=local_seconds - self.offset * 60, nanosecond=nanosecond, offset=self.offset)

    @property
    def year(self) -> int:
        return self._local().year

    @property
    def month(self) -> int:
        return self._local().month

    @property
    def day(self) -> int:
        return self._local().day

    @property
    def hour(self) -> int:
        return self._local().hour

    @property
    def minute(self) -> int:
        return self._local().minute

    @property
    def second(self) -> int:
        return self._local().second

    @property
    def microsecond(self) -> int:
        return self.nanosecond // 1000

    @property
    def day_of_week(self) -> int:
        return self._local().isoweekday()

    @property
    def day_of_year(self) -> int:
        return self._local().timetuple().tm_yday

    # Adjusters ---------------------------------------------------------------

    def with_offset_same_instant(self, offset: int) -> "Instant":
        return Instant(epoch=self.epoch, nanosecond=self.nanosecond, offset=offset)

    def with_offset_same_local(self, offset: int) -> "Instant":
        shift = (offset - self.offset) * 60
        return Instant(epoch=self.epoch - shift, nanosecond=self.nanosecond, offset=offset)

    def with_hour(self, hour: int) -> "Instant":
        return self._with_local(self._local().replace(hour=hour), self.nanosecond)

    def with_minute(self, minute: int) -> "Instant":
        return self._with_local(self._local().replace(minute=minute), self.nanosecond)

    def with_second(self, second: int) -> "Instant":
        return self._with_local(self._local().replace(second=second), self.nanosecond)

    def with_nanosecond(self, nanosecond: int) -> "Instant":
        return Instant(epoch=self.epoch, nanosecond=nanosecond, offset=self.offset)

    def at_end_of_day(self) -> "Instant":
        """Copy of this instant at 23:59:59.999999999 on the same local day."""
        return self._with_local(self._local().replace(hour=23, minute=59, second=59), 999_999_999)

    # Comparison --------------------------------------------------------------

    def compare(self, other: "Instant") -> int:
        mine = (self.epoch, self.nanosecond)
        theirs = (other.epoch, other.nanosecond)
        return (mine > theirs) - (mine < theirs)

    def is_equal(self, other: "Instant") -> bool:
        return self.compare(other) == 0

    def is_before(self, other: "Instant") -> bool:
        return self.compare(other) < 0

    def is_after(self, other: "Instant") -> bool:
        return self.compare(other) > 0

    # Rendering ---------------------------------------------------------------

    def to_datetime(self) -> datetime:
        tz = timezone(timedelta(minutes=self.offset))
        return self._local().replace(microsecond=self.microsecond, tzinfo=tz)

    def strftime(self, pattern: str) -> str:
        return self.to_datetime().strftime(pattern)

    def to_string(self) -> str:
        local = self._local()
        text = (
            f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
            f"T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
        )
        if self.nanosecond:
            if self.nanosecond % 1_000_000 == 0:
                text += f".{self.nanosecond // 1_000_000:03d}"
            elif self.nanosecond % 1000 == 0:
                text += f".{self.nanosecond // 1000:06d}"
            else:
                text += f".{self.nanosecond:09d}"
        if self.offset == 0:
            return text + "Z"
        sign = "+" if self.offset > 0 else "-"
        hours, minutes = divmod(abs(self.offset), 60)
        return f"{text}{sign}{hours:02d}:{minutes:02d}"

    def __str__(self) -> str:
        return self.to_string()
