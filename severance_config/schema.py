"""
SeverancePolicy schema.

Defines the reviewable legal parameters of a severance calculation: the
notice (preaviso) tiers, the vacation schedule, the day-count bases and the
bonus anchors.  YAML policy files are parsed into these types by the loader;
engines receive a ``SeverancePolicy`` and never read files themselves.

``DEFAULT_POLICY`` mirrors ``policies/honduras.yaml`` so engines can be
called without touching the configuration layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from severance_kernel.logging_config import get_logger

logger = get_logger("config.schema")


# ---------------------------------------------------------------------------
# Tier tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoticeTier:
    """Notice days owed once service reaches ``min_months`` full months."""

    min_months: int
    notice_days: int

    def __post_init__(self) -> None:
        if self.min_months < 0:
            raise ValueError("min_months cannot be negative")
        if self.notice_days < 0:
            raise ValueError("notice_days cannot be negative")


@dataclass(frozen=True)
class VacationTier:
    """Vacation days granted for the given service cycle (1-based)."""

    cycle: int
    days: int

    def __post_init__(self) -> None:
        if self.cycle < 1:
            raise ValueError("cycle must be at least 1")
        if self.days < 0:
            raise ValueError("days cannot be negative")


@dataclass(frozen=True)
class BonusAnchor:
    """Month/day on which an annual bonus starts accruing."""

    month: int
    day: int

    def __post_init__(self) -> None:
        # Raises ValueError for impossible month/day pairs.
        date(2001, self.month, self.day)

    def in_year(self, year: int) -> date:
        return date(year, self.month, self.day)


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeverancePolicy:
    """
    Legal parameters for one jurisdiction.

    Contract:
        Frozen, validated on construction.  Tier tables are sorted
        ascending and begin at the first tier (0 months / cycle 1).
    Guarantees:
        - ``notice_tiers`` is strictly ascending by ``min_months`` and
          starts at 0.
        - ``vacation_schedule`` covers cycles 1..N contiguously; the last
          tier applies to every later cycle.
    Non-goals:
        - Does not validate that the figures match current law; that is a
          review concern for the YAML file.
    """

    jurisdiction: str
    name: str
    version: int
    currency: str
    trial_period_days: int
    days_per_month: int
    days_per_year: int
    months_per_year: int
    bonus_months_per_year: int
    severance_days_per_year: int
    notice_tiers: tuple[NoticeTier, ...]
    vacation_schedule: tuple[VacationTier, ...]
    thirteenth_month_anchor: BonusAnchor
    fourteenth_month_anchor: BonusAnchor
    day_count_places: int = 2
    vacation_leave_type: str = "Vacation"
    approved_status: str = "Approved"
    checksum: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        for name in (
            "trial_period_days",
            "days_per_month",
            "days_per_year",
            "months_per_year",
            "bonus_months_per_year",
            "severance_days_per_year",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.days_per_month == 0 or self.days_per_year == 0 or self.months_per_year == 0:
            raise ValueError("day-count bases must be positive")

        if not self.notice_tiers or self.notice_tiers[0].min_months != 0:
            raise ValueError("notice_tiers must start at min_months=0")
        months = [t.min_months for t in self.notice_tiers]
        if months != sorted(set(months)):
            raise ValueError("notice_tiers must be strictly ascending by min_months")

        cycles = [t.cycle for t in self.vacation_schedule]
        if not cycles or cycles != list(range(1, len(cycles) + 1)):
            raise ValueError("vacation_schedule must cover cycles 1..N contiguously")

        logger.debug(
            "severance_policy_initialized",
            extra={
                "jurisdiction": self.jurisdiction,
                "policy_version": self.version,
                "notice_tier_count": len(self.notice_tiers),
                "vacation_tier_count": len(self.vacation_schedule),
            },
        )


DEFAULT_POLICY = SeverancePolicy(
    jurisdiction="HN",
    name="Honduras Codigo del Trabajo",
    version=1,
    currency="HNL",
    trial_period_days=90,
    days_per_month=30,
    days_per_year=360,
    months_per_year=12,
    bonus_months_per_year=14,
    severance_days_per_year=30,
    notice_tiers=(
        NoticeTier(0, 0),
        NoticeTier(3, 7),
        NoticeTier(6, 14),
        NoticeTier(12, 30),
        NoticeTier(24, 60),
        NoticeTier(60, 90),
        NoticeTier(120, 120),
    ),
    vacation_schedule=(
        VacationTier(1, 10),
        VacationTier(2, 12),
        VacationTier(3, 15),
        VacationTier(4, 20),
    ),
    thirteenth_month_anchor=BonusAnchor(1, 1),
    fourteenth_month_anchor=BonusAnchor(7, 1),
)
