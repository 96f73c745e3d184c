"""
severance_config -- single public entrypoint for legal policy configuration.

Responsibility:
    Provides the ONLY way to obtain a severance policy at runtime through
    ``get_active_policy()``.  Engines receive the returned
    ``SeverancePolicy`` as a parameter and never read files themselves.

Architecture position:
    Configuration -- YAML-driven policy, validated at load time.
    Sits above ``severance_kernel`` and below ``severance_services``.
    Engines import only the schema types from this package.

Failure modes:
    - ``PolicyNotFoundError`` -- no policy file for the jurisdiction.
    - ``InvalidPolicyError`` -- malformed YAML or schema validation failure.

Audit relevance:
    Every successful ``get_active_policy()`` call emits a
    ``SEVERANCE_CONFIG_TRACE`` log entry with the jurisdiction, version
    and checksum, tying each calculation to the exact legal parameters
    that produced it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from severance_config.loader import load_policy
from severance_config.schema import (
    DEFAULT_POLICY,
    BonusAnchor,
    NoticeTier,
    SeverancePolicy,
    VacationTier,
)

_logger = logging.getLogger("severance_kernel.config")

_DEFAULT_POLICY_DIR = Path(__file__).parent / "policies"

# Jurisdiction code -> policy file stem
_POLICY_FILES = {
    "HN": "honduras",
}


def get_active_policy(
    jurisdiction: str = "HN",
    policy_dir: Path | None = None,
) -> SeverancePolicy:
    """The ONLY public policy entrypoint.

    Args:
        jurisdiction: ISO 3166 alpha-2 code of the labor jurisdiction.
        policy_dir: Override path to the policy directory.
            Defaults to severance_config/policies/.

    Returns:
        A validated, frozen ``SeverancePolicy`` carrying its checksum.

    Raises:
        PolicyNotFoundError: If no policy file exists for the jurisdiction.
        InvalidPolicyError: If the file fails to parse or validate.
    """
    directory = policy_dir or _DEFAULT_POLICY_DIR
    stem = _POLICY_FILES.get(jurisdiction, jurisdiction.lower())
    policy = load_policy(directory / f"{stem}.yaml", jurisdiction=jurisdiction)

    _logger.info(
        "SEVERANCE_CONFIG_TRACE",
        extra={
            "trace_type": "SEVERANCE_CONFIG_TRACE",
            "jurisdiction": policy.jurisdiction,
            "policy_name": policy.name,
            "policy_version": policy.version,
            "checksum": policy.checksum,
            "currency": policy.currency,
        },
    )
    return policy


__all__ = [
    "DEFAULT_POLICY",
    "BonusAnchor",
    "NoticeTier",
    "SeverancePolicy",
    "VacationTier",
    "get_active_policy",
]
