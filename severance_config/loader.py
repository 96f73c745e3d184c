"""
Policy Loader (``severance_config.loader``).

Responsibility
--------------
Loads a YAML policy file and parses it into a frozen
``severance_config.schema.SeverancePolicy``.  The single public entry
point for runtime policy is ``severance_config.get_active_policy()``.

Invariants enforced
-------------------
* Every parse error surfaces as ``InvalidPolicyError`` with the source
  path and a descriptive reason; there are no silent defaults for
  required keys.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  parsed mapping for configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``PolicyNotFoundError``.
* Malformed YAML, missing keys, invalid values  -> ``InvalidPolicyError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from severance_config.schema import (
    BonusAnchor,
    NoticeTier,
    SeverancePolicy,
    VacationTier,
)
from severance_kernel.exceptions import InvalidPolicyError, PolicyNotFoundError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 checksum of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_anchor(data: dict[str, Any]) -> BonusAnchor:
    return BonusAnchor(month=int(data["month"]), day=int(data["day"]))


def parse_policy(data: dict[str, Any], checksum: str = "") -> SeverancePolicy:
    """
    Parse a ``SeverancePolicy`` from a dict.

    Raises:
        KeyError: if required keys are missing.
        ValueError: if values fail schema validation.
    """
    notice_tiers = tuple(
        NoticeTier(min_months=int(t["min_months"]), notice_days=int(t["notice_days"]))
        for t in data["notice_tiers"]
    )
    vacation_schedule = tuple(
        VacationTier(cycle=int(t["cycle"]), days=int(t["days"]))
        for t in data["vacation_schedule"]
    )
    return SeverancePolicy(
        jurisdiction=str(data["jurisdiction"]),
        name=str(data.get("name", data["jurisdiction"])),
        version=int(data.get("version", 1)),
        currency=str(data["currency"]),
        trial_period_days=int(data["trial_period_days"]),
        days_per_month=int(data["days_per_month"]),
        days_per_year=int(data["days_per_year"]),
        months_per_year=int(data["months_per_year"]),
        bonus_months_per_year=int(data["bonus_months_per_year"]),
        severance_days_per_year=int(data["severance_days_per_year"]),
        notice_tiers=notice_tiers,
        vacation_schedule=vacation_schedule,
        thirteenth_month_anchor=parse_anchor(data["thirteenth_month_anchor"]),
        fourteenth_month_anchor=parse_anchor(data["fourteenth_month_anchor"]),
        day_count_places=int(data.get("day_count_places", 2)),
        vacation_leave_type=str(data.get("vacation_leave_type", "Vacation")),
        approved_status=str(data.get("approved_status", "Approved")),
        checksum=checksum,
    )


def load_policy(path: Path, jurisdiction: str = "") -> SeverancePolicy:
    """
    Load and validate a policy file.

    Raises:
        PolicyNotFoundError: if ``path`` does not exist.
        InvalidPolicyError: if the YAML is malformed or fails validation.
    """
    if not path.is_file():
        raise PolicyNotFoundError(jurisdiction or path.stem, str(path))
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise InvalidPolicyError(str(path), f"malformed YAML: {e}") from e
    if not isinstance(data, dict):
        raise InvalidPolicyError(str(path), "top-level document must be a mapping")

    try:
        policy = parse_policy(data, checksum=compute_checksum(data))
    except KeyError as e:
        raise InvalidPolicyError(str(path), f"missing required key {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise InvalidPolicyError(str(path), str(e)) from e

    if jurisdiction and policy.jurisdiction != jurisdiction:
        raise InvalidPolicyError(
            str(path),
            f"declares jurisdiction {policy.jurisdiction!r}, expected {jurisdiction!r}",
        )
    return policy
