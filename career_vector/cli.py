"""
Career Vector — command-line interface.

Each command:
  1. Loads ``AppConfig`` (``--config`` or the layered defaults).
  2. Configures logging on stderr.
  3. Loads the role catalog or calls the postings index.
  4. Prints its result on stdout.  JSON-producing commands print nothing else.

Failures print ``[ERROR] ...`` on stderr and exit with code 1.

Install and run::

    pip install -e .
    career-vector --help
    career-vector validate-config
    career-vector validate-catalog
    career-vector recommend --request request.json
    career-vector listings --title "Registered Nurse"
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn, Optional

import typer

app = typer.Typer(
    name="career-vector",
    help="Career Vector — explainable role recommendations from task and skill profiles.",
    add_completion=False,
)

_CONFIG_HELP = "Path to TOML config file (default: config/default.toml)."
_CATALOG_HELP = "Catalog JSON (default: config [catalog] or the bundled catalog)."


# ── Helpers ───────────────────────────────────────────────────────────────────

def _fail(message: str) -> NoReturn:
    typer.echo(f"[ERROR] {message}", err=True)
    raise typer.Exit(code=1)


def _bootstrap(config_path: Optional[str], with_logging: bool = True):
    """Load the config (exiting on error) and optionally configure logging."""
    from career_vector.config import load_config
    from career_vector.utils.logging import configure_logging

    try:
        config = load_config(config_path)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except ValueError as exc:
        # pydantic.ValidationError and tomllib.TOMLDecodeError
        _fail(f"Config validation failed: {exc}")

    if with_logging:
        configure_logging(config.logging)
    return config


def _open_catalog(config, catalog_path: Optional[str]):
    from career_vector.catalog.loader import CatalogError, load_catalog

    try:
        return load_catalog(catalog_path or config.catalog.catalog_file)
    except CatalogError as exc:
        _fail(str(exc))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
    show_full: bool = typer.Option(
        False, "--full", help="Also dump every setting as JSON."
    ),
) -> None:
    """Check that the configuration loads and show the effective settings."""
    config = _bootstrap(config_path, with_logging=False)

    rows = [
        ("Catalog file", config.catalog.catalog_file or "(bundled)"),
        ("Top N", config.scoring.top_n),
        ("Listings URL", config.listings.base_url),
        ("Listings index", config.listings.index),
        ("Log level", config.logging.level),
        ("Debug mode", config.debug),
    ]
    typer.echo("Configuration loaded.")
    typer.echo("")
    for label, value in rows:
        typer.echo(f"  {label + ':':<18}{value}")

    if show_full:
        typer.echo("")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-catalog")
def validate_catalog(
    catalog_path: Optional[str] = typer.Option(None, "--catalog", help=_CATALOG_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Validate a role catalog and list its roles by sector."""
    config = _bootstrap(config_path)
    catalog = _open_catalog(config, catalog_path)

    typer.echo(f"Catalog {catalog.version}: {len(catalog)} roles")
    for sector in catalog.sectors():
        key = sector.strip().lower()
        role_ids = [r.role_id for r in catalog if r.sector_key == key]
        typer.echo(f"  {sector:<18} {len(role_ids):>3}  {', '.join(role_ids)}")
    typer.echo("[OK] Catalog valid.")


@app.command("recommend")
def recommend_cmd(
    request_file: str = typer.Option(
        ..., "--request", "-r", help="JSON request file (camelCase fields)."
    ),
    top_n: Optional[int] = typer.Option(
        None, "--top-n", min=1, help="Override config [scoring] top_n."
    ),
    json_out: Optional[str] = typer.Option(
        None, "--json-out", help="Also write the JSON result to this path."
    ),
    csv_out: Optional[str] = typer.Option(
        None, "--csv-out", help="Also write a CSV summary to this path."
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Also write timestamped JSON and CSV reports to config [output] output_dir.",
    ),
    catalog_path: Optional[str] = typer.Option(None, "--catalog", help=_CATALOG_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Rank catalog roles for the user described in a request file.

    Prints the response envelope as JSON.  An empty ``recommendations`` list
    means every role was filtered out; it is not an error.  A request without
    ``stabilityVsUpside`` uses config [scoring] default_stability.
    """
    from pydantic import ValidationError

    from career_vector.models.request import RecommendationRequest
    from career_vector.recommendations.engine import recommend
    from career_vector.recommendations.reporter import (
        build_payload,
        write_recommendation_csv,
        write_recommendation_json,
    )

    config = _bootstrap(config_path)

    path = Path(request_file)
    if not path.is_file():
        _fail(f"Request file not found: {path}")
    try:
        request = RecommendationRequest.model_validate_json(
            path.read_text(encoding="utf-8")
        )
    except ValidationError as exc:
        _fail(f"Invalid request: {exc}")
    if "stability_vs_upside" not in request.model_fields_set:
        request = request.model_copy(
            update={"stability_vs_upside": config.scoring.default_stability}
        )

    catalog = _open_catalog(config, catalog_path)
    recs = recommend(request, catalog, top_n=top_n or config.scoring.top_n)

    typer.echo(json.dumps(build_payload(recs, catalog_version=catalog.version), indent=2))
    if json_out:
        write_recommendation_json(recs, Path(json_out), catalog_version=catalog.version)
    if csv_out:
        write_recommendation_csv(recs, Path(csv_out))
    if save:
        stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        out_dir = Path(config.output.output_dir)
        write_recommendation_json(
            recs, out_dir / f"recommendations_{stamp}.json", catalog_version=catalog.version
        )
        write_recommendation_csv(recs, out_dir / f"recommendations_{stamp}.csv")


@app.command("listings")
def listings(
    title: str = typer.Option(
        ..., "--title", "-t", help="Role title to search live postings for."
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", help="Max postings (default: config [listings] default_limit)."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Search the postings index for live jobs matching a role title."""
    import httpx

    from career_vector.listings.postings_client import PostingsSearchClient

    config = _bootstrap(config_path)
    client = PostingsSearchClient.from_config(config.listings)
    try:
        postings = client.search_by_title(
            title, limit=limit or config.listings.default_limit
        )
    except httpx.HTTPError as exc:
        _fail(f"Postings search failed: {exc}")

    typer.echo(
        json.dumps({"ok": True, "results": [p.as_dict() for p in postings]}, indent=2)
    )


if __name__ == "__main__":
    app()
