"""
Tests for career_vector/catalog/loader.py.

What we test
------------
load_catalog():
  - Bundled reference catalog loads: 17 roles, version "roles_v1".
  - Reference roles present with their published values and not editable in place.
  - Missing file / invalid JSON / invalid role → CatalogError.
  - Version falls back to the file stem for a bare JSON array.

parse_catalog():
  - Accepts a list or {"version", "roles"} object.
  - Rejects duplicate role_id values.
  - Error names the offending role.

RoleCatalog:
  - Iteration in file order, lookup by id, membership.
  - sectors() first-seen order.
  - predecessors() sorted by friction.

CatalogStore:
  - swap() publishes the new catalog and returns the previous one.
  - A failed reload() keeps the current catalog published.
"""

from __future__ import annotations

import json

import pytest

from career_vector.catalog.loader import (
    CatalogError,
    CatalogStore,
    RoleCatalog,
    load_catalog,
    parse_catalog,
)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _role_dict(role_id: str, sector: str = "Tech", **extra) -> dict:
    data = {
        "role_id": role_id,
        "titles": [role_id.replace("_", " ").title()],
        "sector": sector,
        "task_vector": {"analysis": 1},
        "income": {"mid": 80_000},
    }
    data.update(extra)
    return data


class TestReferenceCatalog:
    def test_loads(self, reference_catalog):
        assert reference_catalog.version == "roles_v1"
        assert len(reference_catalog) == 17

    def test_reference_roles_present(self, reference_catalog):
        for role_id in (
            "finance_analyst", "accountant", "nurse_rn",
            "software_engineer", "teacher_k12",
        ):
            assert role_id in reference_catalog

    def test_nurse_values(self, reference_catalog):
        nurse = reference_catalog.get("nurse_rn")
        assert nurse.sector == "Healthcare"
        assert nurse.automation_exposure_baseline == 2.8
        assert nurse.compression_overlay.score == 26
        assert nurse.income.mid == 95_000
        assert [s.name for s in nurse.critical_skills] == [
            "Clinical care", "Patient communication",
        ]

    def test_shared_roles_cannot_be_edited_in_place(self, reference_catalog):
        nurse = reference_catalog.get("nurse_rn")
        with pytest.raises(AttributeError):
            nurse.skills.clear()
        assert len(reference_catalog.get("nurse_rn").skills) == 4

    def test_every_task_vector_normalized(self, reference_catalog):
        for role in reference_catalog:
            assert sum(role.task_vector.values) == pytest.approx(1.0)

    def test_sectors(self, reference_catalog):
        sectors = reference_catalog.sectors()
        assert sectors[0] == "Finance"
        assert {"Healthcare", "Tech", "Education", "Skilled Trades"} <= set(sectors)
        assert len(sectors) == len(set(sectors))


class TestLoadCatalog:
    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read catalog file"):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    def test_bare_array_uses_file_stem(self, tmp_path):
        path = tmp_path / "roles_test.json"
        path.write_text(json.dumps([_role_dict("a"), _role_dict("b")]), encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.version == "roles_test"
        assert [r.role_id for r in catalog] == ["a", "b"]

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "roles.json"
        path.write_text(json.dumps([_role_dict("a")]), encoding="utf-8")
        assert len(load_catalog(str(path))) == 1


class TestParseCatalog:
    def test_object_form_carries_version(self):
        catalog = parse_catalog({"version": "roles_v9", "roles": [_role_dict("a")]})
        assert catalog.version == "roles_v9"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate role_id"):
            parse_catalog([_role_dict("a"), _role_dict("a")])

    def test_invalid_role_named(self):
        bad = _role_dict("bad_role", automation_exposure_baseline=42)
        with pytest.raises(CatalogError, match="Invalid role 'bad_role'"):
            parse_catalog([_role_dict("ok"), bad])

    def test_not_a_list(self):
        with pytest.raises(CatalogError):
            parse_catalog({"roles": "nope"})

    def test_defaults_applied(self):
        role = parse_catalog([_role_dict("a")]).get("a")
        assert role.income.low == pytest.approx(64_000)
        assert role.work_context.embodiment == 0.3


class TestRoleCatalog:
    def test_lookup(self):
        catalog = parse_catalog([_role_dict("a"), _role_dict("b")])
        assert catalog.get("b").role_id == "b"
        assert catalog.get("zzz") is None
        assert "a" in catalog
        assert "zzz" not in catalog

    def test_sectors_first_seen(self):
        catalog = parse_catalog([
            _role_dict("a", sector="Tech"),
            _role_dict("b", sector="Healthcare"),
            _role_dict("c", sector="tech"),
        ])
        assert catalog.sectors() == ["Tech", "Healthcare"]

    def test_predecessors_sorted_by_friction(self):
        role = _role_dict(
            "target",
            transition_edges=[
                {"from": "zeta", "friction": 0.6},
                {"from": "alpha", "friction": 0.6},
                {"from": "tutor", "friction": 0.2},
            ],
        )
        catalog = parse_catalog([role])
        assert catalog.predecessors("target") == [
            ("tutor", 0.2), ("alpha", 0.6), ("zeta", 0.6),
        ]
        assert catalog.predecessors("missing") == []


class TestCatalogStore:
    def test_swap(self):
        first = RoleCatalog([], version="v1")
        second = parse_catalog([_role_dict("a")], version="v2")
        store = CatalogStore(first)
        assert store.swap(second) is first
        assert store.current is second

    def test_reload(self, tmp_path):
        path = tmp_path / "roles_v2.json"
        path.write_text(json.dumps([_role_dict("a")]), encoding="utf-8")
        store = CatalogStore(RoleCatalog([], version="v1"))
        store.reload(path)
        assert store.current.version == "roles_v2"

    def test_failed_reload_keeps_current(self, tmp_path):
        current = RoleCatalog([], version="v1")
        store = CatalogStore(current)
        with pytest.raises(CatalogError):
            store.reload(tmp_path / "missing.json")
        assert store.current is current
