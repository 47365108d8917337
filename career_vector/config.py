"""
Configuration for the CLI and the collaborators it wires up.

Layers, lowest precedence first:

    config/default.toml            shipped defaults
    config/local.toml              per-machine overrides beside the chosen file
    .env at the project root       loaded into the environment, never overrides it
    CAREER_VECTOR_* variables      see ``_ENV_OVERRIDES``

``CAREER_VECTOR_CONFIG`` selects a different base file when ``--config`` is
not given.  The recommendation engine takes plain arguments and never reads
configuration itself.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Where the role catalog is loaded from.

    ``catalog_file = None`` means the reference catalog bundled with the
    package (``career_vector/data/roles_v1.json``).
    """

    model_config = ConfigDict(frozen=True)

    catalog_file: Optional[str] = None


class ScoringConfig(BaseModel):
    """Ranking parameters."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 10
    default_stability: float = 0.6

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n must be >= 1, got {v}.")
        return v

    @field_validator("default_stability")
    @classmethod
    def validate_stability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"default_stability must be in [0.0, 1.0], got {v}.")
        return v


class ListingsConfig(BaseModel):
    """Live postings search collaborator (OpenSearch / Elasticsearch)."""

    model_config = ConfigDict(frozen=True)

    base_url: str = "http://localhost:9200"
    index: str = "jobs_v1"
    default_limit: int = 10
    max_limit: int = 25
    timeout_s: float = 10.0

    @model_validator(mode="after")
    def validate_limits(self) -> "ListingsConfig":
        if self.max_limit < 1:
            raise ValueError(f"max_limit must be >= 1, got {self.max_limit}.")
        if not 1 <= self.default_limit <= self.max_limit:
            raise ValueError(
                f"default_limit must be in [1, {self.max_limit}], "
                f"got {self.default_limit}."
            )
        return self


class OutputConfig(BaseModel):
    """Filesystem location for exported recommendation reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/recommendations"


class LoggingConfig(BaseModel):
    """Console and file log settings consumed by ``configure_logging``."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log level must be one of {', '.join(LOG_LEVELS)}; got {v!r}."
            )
        return level


class AppConfig(BaseModel):
    """Every setting the CLI needs, grouped by collaborator."""

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    scoring: ScoringConfig = ScoringConfig()
    listings: ListingsConfig = ListingsConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

DEFAULT_CONFIG = Path("config") / "default.toml"
LOCAL_CONFIG_NAME = "local.toml"

# (variable, dotted key) pairs applied in order; later pairs win.
_ENV_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("CAREER_VECTOR_CATALOG_FILE", "catalog.catalog_file"),
    ("CAREER_VECTOR_LOG_LEVEL", "logging.level"),
    ("CAREER_VECTOR_DEBUG", "debug"),
    ("OPENSEARCH_URL", "listings.base_url"),
    ("CAREER_VECTOR_LISTINGS_URL", "listings.base_url"),
)


def _project_root() -> Path:
    """Nearest ancestor of the package holding ``pyproject.toml``."""
    package_dir = Path(__file__).resolve().parent
    return next(
        (p for p in package_dir.parents if (p / "pyproject.toml").is_file()),
        package_dir.parent,
    )


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Build the ``AppConfig`` from every configuration layer.

    Args:
        config_path: Base TOML file.  Falls back to ``CAREER_VECTOR_CONFIG``,
            then to ``config/default.toml`` under the project root.

    Raises:
        FileNotFoundError: If the base file does not exist.
        pydantic.ValidationError: If any merged value is invalid.
    """
    root = _project_root()
    load_dotenv(root / ".env", override=False)

    path = Path(
        config_path or os.environ.get("CAREER_VECTOR_CONFIG") or root / DEFAULT_CONFIG
    )
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}. "
            "Pass --config or set CAREER_VECTOR_CONFIG."
        )

    raw = _read_toml(path)
    local_path = path.with_name(LOCAL_CONFIG_NAME)
    if local_path.is_file() and local_path != path:
        raw = _deep_merge(raw, _read_toml(local_path))
    raw = _apply_env_overrides(raw, os.environ)

    project = raw.pop("project", {})
    raw.setdefault("debug", project.get("debug", False))
    return AppConfig.model_validate(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Layer ``override`` on top of ``base`` table by table."""
    merged = {**base}
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def _apply_env_overrides(
    raw: dict[str, Any], environ: Mapping[str, str]
) -> dict[str, Any]:
    """Write non-empty ``_ENV_OVERRIDES`` variables into ``raw``.

    Values stay strings; the config models coerce them (``"true"`` → bool,
    ``"debug"`` → ``"DEBUG"``).
    """
    for var, dotted in _ENV_OVERRIDES:
        value = environ.get(var)
        if not value:
            continue
        *sections, key = dotted.split(".")
        table = raw
        for section in sections:
            table = table.setdefault(section, {})
        table[key] = value
    return raw
