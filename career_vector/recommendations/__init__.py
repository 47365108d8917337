"""
Recommendation engine: scores catalog roles against a user request and
returns a ranked, explained shortlist.

Modules
-------
aggregator   : AggregationWeights + hard filters + RoleScore + rank_scores()
               (pure functions, no I/O).
explanations : ordered driver rule table, skill gaps, transition plan,
               build_recommendation().
engine       : recommend(), the single entry point tying the above together.
reporter     : write_recommendation_json() + write_recommendation_csv().
"""
