# tests/test_qualifications.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_planner.team.qualifications import load_registry, registry_from_dict

DOC = {
    "qualifications": {
        "Design": ["Alice", "Marco"],
        "Development": ["Marco", "Priya", "Marco"],
    },
    "teamMembers": {
        "Alice": {"role": "Designer", "email": "alice@example.com"},
        "Marco": {"role": "Developer"},
        "Priya": {"role": "Developer"},
    },
}


def test_load_registry_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "q.json"
    path.write_text(json.dumps(DOC), "utf-8")

    reg = load_registry(path)

    assert reg.task_types() == {"Design", "Development"}
    assert reg.qualified_members("Design") == ["Alice", "Marco"]
    assert reg.qualified_members("Development") == ["Marco", "Priya"]
    assert reg.is_qualified("Priya", "Development")
    assert not reg.is_qualified("Priya", "Design")

    profile = reg.member_profile("Alice")
    assert profile is not None
    assert profile.role == "Designer"
    assert profile.extra.get("email") == "alice@example.com"


def test_unknown_type_has_no_members() -> None:
    reg = registry_from_dict(DOC)

    assert reg.qualified_members("Catering") == []
    assert reg.qualified_members(None) == []


def test_missing_file_gives_empty_registry(tmp_path: Path) -> None:
    reg = load_registry(tmp_path / "nope.json")

    assert reg.is_empty
    assert reg.all_members() == []


def test_malformed_file_gives_empty_registry(tmp_path: Path) -> None:
    path = tmp_path / "q.json"
    path.write_text("{not json", "utf-8")

    assert load_registry(path).is_empty


def test_wrong_shape_is_rejected() -> None:
    with pytest.raises(ValueError):
        registry_from_dict(["Design"])
    with pytest.raises(ValueError):
        registry_from_dict({"qualifications": ["Design"]})
