"""
Role catalog: JSON → validated, immutable in-memory table.

Responsibilities
----------------
1. Load a catalog JSON file (an array of role objects, or an object with a
   ``"roles"`` array) and validate every entry into a ``RoleProfile``.
   Schema defaults are applied here, once.
2. Reject duplicate ``role_id`` values and invalid entries with
   ``CatalogError`` naming the offending role.
3. Publish the result as a ``RoleCatalog`` that is never mutated.

Hot reload
----------
``CatalogStore`` holds the current catalog behind a single reference.
``swap()`` / ``reload()`` build the complete new catalog first and then
replace the reference in one assignment.  A request reads ``store.current``
once and keeps that reference, so it sees either the old catalog or the new
one in full.

Usage
-----
    from career_vector.catalog.loader import CatalogStore, load_catalog

    catalog = load_catalog()                   # bundled reference catalog
    store = CatalogStore(catalog)
    recs = recommend(request, store.current)
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from pydantic import ValidationError

from career_vector.models.role import RoleProfile

log = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "roles_v1.json"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be read or contains invalid roles."""


class RoleCatalog:
    """Read-only, ordered table of role profiles.

    Iteration yields roles in file order.  Lookups are by ``role_id``.
    """

    __slots__ = ("_roles", "_by_id", "_version")

    def __init__(self, roles: list[RoleProfile], version: str = "unversioned") -> None:
        by_id: dict[str, RoleProfile] = {}
        for role in roles:
            if role.role_id in by_id:
                raise CatalogError(f"Duplicate role_id in catalog: '{role.role_id}'.")
            by_id[role.role_id] = role
        self._roles: tuple[RoleProfile, ...] = tuple(roles)
        self._by_id = MappingProxyType(by_id)
        self._version = version

    def __iter__(self) -> Iterator[RoleProfile]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._by_id

    def __repr__(self) -> str:
        return f"RoleCatalog(version={self._version!r}, roles={len(self._roles)})"

    @property
    def version(self) -> str:
        return self._version

    @property
    def roles(self) -> tuple[RoleProfile, ...]:
        return self._roles

    def get(self, role_id: str) -> Optional[RoleProfile]:
        return self._by_id.get(role_id)

    def sectors(self) -> list[str]:
        """Distinct sectors in first-seen order."""
        seen: dict[str, str] = {}
        for role in self._roles:
            seen.setdefault(role.sector_key, role.sector)
        return list(seen.values())

    def predecessors(self, role_id: str) -> list[tuple[str, float]]:
        """Known ``(from_role, friction)`` edges into ``role_id``, easiest first."""
        role = self._by_id.get(role_id)
        if role is None:
            return []
        edges = sorted(role.transition_edges, key=lambda e: (e.friction, e.from_role))
        return [(e.from_role, e.friction) for e in edges]


def parse_catalog(raw: Any, version: str = "unversioned") -> RoleCatalog:
    """Validate already-decoded catalog JSON into a ``RoleCatalog``.

    Raises:
        CatalogError: On a malformed document, invalid role, or duplicate id.
    """
    if isinstance(raw, dict):
        version = str(raw.get("version", version))
        entries = raw.get("roles")
    else:
        entries = raw
    if not isinstance(entries, list):
        raise CatalogError("Catalog must be a JSON array of roles or {'roles': [...]}.")

    roles: list[RoleProfile] = []
    for i, entry in enumerate(entries):
        label = entry.get("role_id", f"#{i}") if isinstance(entry, dict) else f"#{i}"
        try:
            roles.append(RoleProfile.model_validate(entry))
        except ValidationError as exc:
            raise CatalogError(f"Invalid role '{label}': {exc}") from exc

    return RoleCatalog(roles, version=version)


def load_catalog(path: Optional[Path | str] = None) -> RoleCatalog:
    """Load and validate a catalog file.

    Args:
        path: Catalog JSON path.  ``None`` loads the bundled reference catalog.

    Raises:
        CatalogError: If the file is missing, not JSON, or has invalid roles.
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        text = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog file {catalog_path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file {catalog_path} is not valid JSON: {exc}") from exc

    catalog = parse_catalog(raw, version=catalog_path.stem)
    log.info(
        "Loaded role catalog %s: %d roles, %d sectors",
        catalog.version, len(catalog), len(catalog.sectors()),
    )
    return catalog


class CatalogStore:
    """Holder for the live catalog with replace-by-swap refresh."""

    def __init__(self, catalog: RoleCatalog) -> None:
        self._catalog = catalog
        self._write_lock = threading.Lock()

    @property
    def current(self) -> RoleCatalog:
        return self._catalog

    def swap(self, catalog: RoleCatalog) -> RoleCatalog:
        """Publish ``catalog`` and return the one it replaced."""
        with self._write_lock:
            previous = self._catalog
            self._catalog = catalog
        log.info("Catalog swapped: %r -> %r", previous, catalog)
        return previous

    def reload(self, path: Optional[Path | str] = None) -> RoleCatalog:
        """Load a fresh catalog and swap it in.

        On failure the current catalog stays published and the error
        propagates.
        """
        return self.swap(load_catalog(path))
