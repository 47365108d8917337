"""
Shared pytest fixtures for the Career Vector test suite.

Provides:
  - ``reference_catalog``: the bundled ``roles_v1`` catalog, loaded fresh.
  - ``make_role``: factory building a ``RoleProfile`` from a neutral base
    profile plus keyword overrides.
  - ``make_catalog``: factory building a ``RoleCatalog`` from role overrides.
  - ``make_request``: factory building a ``RecommendationRequest`` from
    camelCase keyword overrides.
  - ``test_config_file``: a minimal TOML config with quiet logging.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable

import pytest

from career_vector.catalog.loader import RoleCatalog, load_catalog
from career_vector.models.request import RecommendationRequest
from career_vector.models.role import RoleProfile

_BASE_ROLE: dict[str, Any] = {
    "role_id": "test_role",
    "titles": ["Test Role"],
    "aliases": ["Example Role"],
    "sector": "Healthcare",
    "seniority_bands": ["entry", "mid", "senior"],
    "skills": [],
    "task_vector": {"analysis": 1.0},
    "income": {"low": 50000, "mid": 70000, "high": 90000},
}


@pytest.fixture
def make_role() -> Callable[..., RoleProfile]:
    """Factory: ``make_role(role_id="x", sector="Tech", ...) -> RoleProfile``."""

    def _make(**overrides: Any) -> RoleProfile:
        data = copy.deepcopy(_BASE_ROLE)
        data.update(overrides)
        return RoleProfile.model_validate(data)

    return _make


@pytest.fixture
def make_catalog(make_role) -> Callable[..., RoleCatalog]:
    """Factory: ``make_catalog(dict(role_id="a"), dict(role_id="b"))``."""

    def _make(*role_overrides: dict[str, Any]) -> RoleCatalog:
        return RoleCatalog([make_role(**o) for o in role_overrides], version="test")

    return _make


@pytest.fixture
def make_request() -> Callable[..., RecommendationRequest]:
    """Factory: ``make_request(taskWeights={...}, stabilityVsUpside=0.2)``."""

    def _make(**fields: Any) -> RecommendationRequest:
        return RecommendationRequest.model_validate(fields)

    return _make


@pytest.fixture
def reference_catalog() -> RoleCatalog:
    return load_catalog()


@pytest.fixture
def test_config_file(tmp_path: Path) -> Path:
    """A TOML config with logging quiet enough to keep CLI stdout clean."""
    path = tmp_path / "config" / "test.toml"
    path.parent.mkdir(parents=True)
    path.write_text(
        "[scoring]\n"
        "top_n = 5\n"
        "\n"
        "[listings]\n"
        'base_url = "http://search.test:9200"\n'
        "\n"
        "[logging]\n"
        'level = "WARNING"\n',
        encoding="utf-8",
    )
    return path
