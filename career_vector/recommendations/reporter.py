"""
Recommendation report writer: JSON and CSV output for a ranked shortlist.

All functions are pure I/O: they consume an in-memory list of
``ScoredRecommendation`` and write human-readable + machine-readable files.

JSON layout
-----------
    {
      "ok": true,
      "recommendations": [ ...camelCase ScoredRecommendation... ],
      "meta": {"produced": 7, "updatedAt": "...", "catalogVersion": "roles_v1"}
    }
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from career_vector.models.recommendation import ScoredRecommendation

logger = logging.getLogger(__name__)


def build_payload(
    recs: list[ScoredRecommendation],
    catalog_version: str = "",
    updated_at: datetime | None = None,
) -> dict[str, Any]:
    """JSON-ready response envelope for a list of recommendations."""
    if updated_at is None:
        updated_at = datetime.now(tz=timezone.utc)
    return {
        "ok": True,
        "recommendations": [r.model_dump(mode="json", by_alias=True) for r in recs],
        "meta": {
            "produced": len(recs),
            "updatedAt": updated_at.isoformat(),
            "catalogVersion": catalog_version,
        },
    }


def write_recommendation_json(
    recs: list[ScoredRecommendation],
    json_path: Path,
    catalog_version: str = "",
) -> Path:
    """Write recommendations to a structured JSON file.

    Args:
        recs:            Ranked recommendations (best first).
        json_path:       Target file; parent directories are created.
        catalog_version: Catalog version for provenance.

    Returns:
        Path to the written JSON file.
    """
    json_path.parent.mkdir(parents=True, exist_ok=True)
    payload = build_payload(recs, catalog_version=catalog_version)
    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Recommendation JSON written: %s (%d rows)", json_path, len(recs))
    return json_path


def write_recommendation_csv(
    recs: list[ScoredRecommendation],
    csv_path: Path,
) -> Path:
    """Write one row per recommendation to a CSV file.

    Columns: rank, role_id, title, sector, final, fit, resilience, economics,
             ease, difficulty, income_low, income_mid, income_high, why,
             skill_gaps.  ``why`` and ``skill_gaps`` are ``"; "``-joined;
             critical gaps are marked with ``*``.

    Returns:
        Path to the written CSV file.
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank", "role_id", "title", "sector", "final",
        "fit", "resilience", "economics", "ease", "difficulty",
        "income_low", "income_mid", "income_high", "why", "skill_gaps",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, rec in enumerate(recs, start=1):
            writer.writerow(
                {
                    "rank":        rank,
                    "role_id":     rec.role_id,
                    "title":       rec.title,
                    "sector":      rec.sector,
                    "final":       rec.final,
                    "fit":         rec.fit,
                    "resilience":  rec.resilience,
                    "economics":   rec.economics,
                    "ease":        rec.ease,
                    "difficulty":  rec.difficulty,
                    "income_low":  rec.income_band.low,
                    "income_mid":  rec.income_band.mid,
                    "income_high": rec.income_band.high,
                    "why":         "; ".join(rec.why),
                    "skill_gaps":  "; ".join(
                        f"{g.name}*" if g.critical else g.name for g in rec.skill_gaps
                    ),
                }
            )

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(recs))
    return csv_path
