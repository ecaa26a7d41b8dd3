"""Availability-gated installation planner.

Turns a declared desired-state package list into the list of packages that
should actually be handed to the package manager, given a live package index.

Groups come in two flavours:
- ``AllOf``: every available, enabled member is installed.
- ``FirstOf``: ordered alternatives; only the first member that is both
  available and enabled is installed (e.g. winehq-staging -> winehq-devel ->
  winehq-stable).

The planner is pure apart from logging: it only reads through the oracle and
returns an immutable ``InstallPlan``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

AvailabilityOracle = Callable[[str], bool]


class SkipReason(str, Enum):
    DISABLED = "disabled"
    UNAVAILABLE = "unavailable"
    # An earlier alternative in a FirstOf group already satisfied the slot.
    NOT_ATTEMPTED = "not_attempted"


@dataclass(frozen=True)
class PackageRequest:
    name: str
    enabled: bool = True


@dataclass(frozen=True)
class AllOf:
    group_id: str
    requests: Tuple[PackageRequest, ...]


@dataclass(frozen=True)
class FirstOf:
    group_id: str
    requests: Tuple[PackageRequest, ...]


PackageGroup = Union[AllOf, FirstOf]


@dataclass(frozen=True)
class SkippedPackage:
    name: str
    reason: SkipReason
    group: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "reason": self.reason.value, "group": self.group}


@dataclass(frozen=True)
class InstallPlan:
    to_install: Tuple[str, ...]
    skipped: Tuple[SkippedPackage, ...]

    def skipped_by_reason(self, reason: SkipReason) -> List[str]:
        return [s.name for s in self.skipped if s.reason is reason]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "to_install": list(self.to_install),
            "skipped": [s.to_dict() for s in self.skipped],
        }


def requests_for(names: Iterable[str], *, enabled: bool = True) -> Tuple[PackageRequest, ...]:
    return tuple(PackageRequest(name=n, enabled=enabled) for n in names)


def is_available(oracle: AvailabilityOracle, name: str) -> bool:
    """Ask the oracle; anything but a clear ``True`` (including an error) is "no"."""
    try:
        answer = oracle(name)
    except Exception as e:
        logger.warning("Availability check for %s failed (%s); treating as unavailable", name, e)
        return False
    return answer is True


def _plan_all_of(group: AllOf, oracle: AvailabilityOracle, pending: List[str], skipped: List[SkippedPackage]) -> None:
    for req in group.requests:
        if not is_available(oracle, req.name):
            skipped.append(SkippedPackage(req.name, SkipReason.UNAVAILABLE, group.group_id))
        elif req.enabled:
            pending.append(req.name)
        else:
            skipped.append(SkippedPackage(req.name, SkipReason.DISABLED, group.group_id))


def _plan_first_of(group: FirstOf, oracle: AvailabilityOracle, pending: List[str], skipped: List[SkippedPackage]) -> None:
    chosen = None
    for req in group.requests:
        if chosen is not None:
            skipped.append(SkippedPackage(req.name, SkipReason.NOT_ATTEMPTED, group.group_id))
            continue
        if not is_available(oracle, req.name):
            skipped.append(SkippedPackage(req.name, SkipReason.UNAVAILABLE, group.group_id))
        elif not req.enabled:
            skipped.append(SkippedPackage(req.name, SkipReason.DISABLED, group.group_id))
        else:
            chosen = req.name
            pending.append(req.name)

    if chosen is None:
        logger.warning("No package found for %s (tried %s)", group.group_id, ", ".join(r.name for r in group.requests))


def dedup(names: Iterable[str]) -> List[str]:
    """De-dup while preserving first-occurrence order."""
    seen: set[str] = set()
    out: List[str] = []
    for n in names:
        if n not in seen:
            seen.add(n)
            out.append(n)
    return out


def plan(groups: Sequence[PackageGroup], oracle: AvailabilityOracle) -> InstallPlan:
    """Build the install plan for ``groups`` against a live availability oracle.

    Members are evaluated in declared order, group by group. The resulting
    ``to_install`` is deduplicated by first occurrence and otherwise keeps
    declaration order. ``skipped`` holds each rejected name once (first
    rejection wins); a name that another group ends up installing is not
    reported as skipped.
    """

    pending: List[str] = []
    rejected: List[SkippedPackage] = []

    for group in groups:
        if isinstance(group, FirstOf):
            _plan_first_of(group, oracle, pending, rejected)
        elif isinstance(group, AllOf):
            _plan_all_of(group, oracle, pending, rejected)
        else:
            raise TypeError(f"Unknown package group type: {type(group).__name__}")

    to_install = dedup(pending)
    installing = set(to_install)

    skipped: List[SkippedPackage] = []
    seen: set[str] = set()
    for s in rejected:
        if s.name in installing or s.name in seen:
            continue
        seen.add(s.name)
        skipped.append(s)

    return InstallPlan(to_install=tuple(to_install), skipped=tuple(skipped))
