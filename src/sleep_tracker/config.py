"""Configuration models and helpers for the sleep aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """Thresholds used when resolving open sessions and splitting logical days."""

    max_active: timedelta = timedelta(hours=24)
    capped_duration: timedelta = timedelta(hours=16)
    day_gap: timedelta = timedelta(hours=12)

    @classmethod
    def from_hours(
        cls,
        max_active_hours: float,
        capped_duration_hours: float,
        day_gap_hours: float | None = None,
    ) -> "EngineSettings":
        for name, value in (
            ("max_active_hours", max_active_hours),
            ("capped_duration_hours", capped_duration_hours),
            ("day_gap_hours", day_gap_hours),
        ):
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        gap = day_gap_hours if day_gap_hours is not None else 12.0
        return cls(
            max_active=timedelta(hours=max_active_hours),
            capped_duration=timedelta(hours=capped_duration_hours),
            day_gap=timedelta(hours=gap),
        )

    @property
    def max_active_minutes(self) -> int:
        return int(self.max_active.total_seconds() // 60)

    @property
    def capped_duration_minutes(self) -> int:
        return int(self.capped_duration.total_seconds() // 60)

    @property
    def day_gap_minutes(self) -> int:
        return int(self.day_gap.total_seconds() // 60)
