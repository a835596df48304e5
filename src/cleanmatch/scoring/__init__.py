"""Candidate scoring."""

from cleanmatch.scoring.scorer import compute_match_score, score_breakdown

__all__ = [
    "compute_match_score",
    "score_breakdown",
]
