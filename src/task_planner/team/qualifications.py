# src/task_planner/team/qualifications.py

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MemberProfile:
    name: str
    role: str = ""
    extra: dict[str, Any] = field(default_factory=dict)


class QualificationRegistry:
    """
    Read-only reference data: task type -> ordered qualified members,
    member name -> profile.

    Member order inside a type is the declared order; the assigner uses it to
    break workload ties.
    """

    def __init__(
        self,
        qualifications: Mapping[str, list[str]] | None = None,
        team_members: Mapping[str, MemberProfile] | None = None,
    ) -> None:
        self._qualifications: dict[str, tuple[str, ...]] = {}
        for task_type, members in (qualifications or {}).items():
            ordered: list[str] = []
            for m in members:
                if m not in ordered:
                    ordered.append(m)
            self._qualifications[task_type] = tuple(ordered)
        self._members: dict[str, MemberProfile] = dict(team_members or {})

    @classmethod
    def empty(cls) -> QualificationRegistry:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self._qualifications and not self._members

    def task_types(self) -> set[str]:
        return set(self._qualifications)

    def qualified_members(self, task_type: str | None) -> list[str]:
        if not task_type:
            return []
        return list(self._qualifications.get(task_type, ()))

    def is_qualified(self, member: str, task_type: str | None) -> bool:
        return member in self.qualified_members(task_type)

    def member_profile(self, name: str | None) -> MemberProfile | None:
        if not name:
            return None
        return self._members.get(name)

    def all_members(self) -> list[MemberProfile]:
        return list(self._members.values())


def _parse_profile(name: str, raw: Any) -> MemberProfile:
    if not isinstance(raw, dict):
        return MemberProfile(name=name)
    extra = {k: v for k, v in raw.items() if k not in ("name", "role")}
    return MemberProfile(
        name=str(raw.get("name") or name),
        role=str(raw.get("role") or ""),
        extra=extra,
    )


def registry_from_dict(data: Any) -> QualificationRegistry:
    """Build a registry from the parsed reference document; bad entries are dropped."""
    if not isinstance(data, dict):
        raise ValueError("qualifications document must be an object")

    raw_quals = data.get("qualifications") or {}
    raw_members = data.get("teamMembers") or {}
    if not isinstance(raw_quals, dict) or not isinstance(raw_members, dict):
        raise ValueError("'qualifications' and 'teamMembers' must be objects")

    qualifications: dict[str, list[str]] = {}
    for task_type, members in raw_quals.items():
        if not isinstance(members, list):
            logger.warning("Ignoring qualifications for type=%r: not a list", task_type)
            continue
        qualifications[str(task_type)] = [str(m) for m in members if isinstance(m, str) and m.strip()]

    team_members = {str(name): _parse_profile(str(name), raw) for name, raw in raw_members.items()}
    return QualificationRegistry(qualifications, team_members)


def load_registry(path: str | Path) -> QualificationRegistry:
    """
    Load the reference file. Any failure (missing file, bad JSON, wrong shape)
    is logged and yields an empty registry; assignment then finds no members.
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text("utf-8"))
        registry = registry_from_dict(data)
    except FileNotFoundError:
        logger.warning("Qualifications file not found: %s; assignment disabled", p)
        return QualificationRegistry.empty()
    except (OSError, ValueError):
        logger.exception("Failed to load qualifications from %s", p)
        return QualificationRegistry.empty()

    logger.info(
        "Qualifications loaded types=%d members=%d from %s",
        len(registry.task_types()),
        len(registry.all_members()),
        p,
    )
    return registry
