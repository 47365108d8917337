"""
Recommendation entry point.

Flow
----
1. Build the user's ``TaskVector`` from raw task weights.
2. Derive aggregation weights from the stability-vs-upside slider.
3. Drop roles that fail the hard filters.
4. Score every surviving role (fit, resilience, economics, ease, final).
5. Rank and keep the top N.
6. Attach drivers, skill gaps, plan and difficulty to each survivor.

``recommend()`` is deterministic and side-effect free apart from logging.
An empty result is a normal outcome (e.g. every role filtered out), not an
error.  The catalog is read through the reference passed in; callers holding
a ``CatalogStore`` should pass ``store.current`` once per request.
"""

from __future__ import annotations

import logging

from career_vector.catalog.loader import RoleCatalog
from career_vector.models.recommendation import ScoredRecommendation
from career_vector.models.request import RecommendationRequest
from career_vector.recommendations.aggregator import (
    DEFAULT_TOP_N,
    aggregation_weights,
    filter_roles,
    rank_scores,
    score_role,
)
from career_vector.recommendations.explanations import build_recommendation
from career_vector.scoring.task_vector import build_task_vector

logger = logging.getLogger(__name__)


def recommend(
    request: RecommendationRequest,
    catalog: RoleCatalog,
    top_n: int = DEFAULT_TOP_N,
) -> list[ScoredRecommendation]:
    """Score, rank and explain catalog roles for one request.

    Args:
        request: Validated user request.
        catalog: Role catalog to score against.
        top_n:   Maximum number of recommendations returned.

    Returns:
        Recommendations ordered best first; possibly empty.
    """
    user_vector = build_task_vector(request.task_weights)
    weights = aggregation_weights(request.stability_vs_upside)

    candidates = filter_roles(catalog, request)
    logger.debug(
        "Hard filters kept %d of %d roles (catalog %s)",
        len(candidates), len(catalog), catalog.version,
    )
    if not candidates:
        logger.info("No roles left after hard filters; returning empty result.")
        return []

    scores = [score_role(role, request, user_vector, weights) for role in candidates]
    ranked = rank_scores(scores, top_n=top_n)

    recs = [
        build_recommendation(s, weights, request.constraints.timeline) for s in ranked
    ]
    logger.info(
        "Produced %d recommendations from %d candidates (weights total %.2f)",
        len(recs), len(candidates), weights.total,
    )
    return recs
