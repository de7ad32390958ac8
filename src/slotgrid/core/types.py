from __future__ import annotations

import datetime as dt

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

Instant = dt.datetime  # timezone-aware, normalised to UTC


def ensure_utc(value: dt.datetime) -> dt.datetime:
    """Return ``value`` converted to UTC; naive datetimes are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"instant {value.isoformat()} has no UTC offset")
    return value.astimezone(dt.timezone.utc)


class Window(BaseModel):
    """Half-open availability window ``[start, end)``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "ID"))
    start: Instant = Field(validation_alias=AliasChoices("start", "StartTime", "startTime"))
    end: Instant = Field(validation_alias=AliasChoices("end", "EndTime", "endTime"))
    available: bool = Field(default=True, validation_alias=AliasChoices("available", "Available"))

    @field_validator("start", "end")
    @classmethod
    def _normalise_instant(cls, value: dt.datetime) -> dt.datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _start_before_end(self) -> "Window":
        if self.start >= self.end:
            raise ValueError(
                f"start ({self.start.isoformat()}) must be before end ({self.end.isoformat()})"
            )
        return self

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start

    def span(self) -> tuple[Instant, Instant]:
        return self.start, self.end

    def widened(self, end: Instant) -> "Window":
        """Copy with a later ``end``; identity and availability are kept."""
        return self.model_copy(update={"end": max(self.end, end)})


__all__ = ["Instant", "Window", "ensure_utc"]
