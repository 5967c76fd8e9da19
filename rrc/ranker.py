"""Fuzzy filtering and ordering of discovered repositories."""

from __future__ import annotations

from typing import Sequence

from .models import LocalRepository

MAX_SCORE = 255
EXACT_BONUS = 100
PREFIX_BONUS = 10


def is_fuzzy_match(text: str, query: str) -> bool:
    """True when every character of ``query`` appears in ``text`` in order."""

    chars = iter(text)
    return all(q in chars for q in query)


def compute_score(text: str, query: str) -> int:
    """Similarity of ``text`` to ``query``; lower is more similar."""

    score = MAX_SCORE
    if text == query:
        score -= EXACT_BONUS
    if text.startswith(query):
        score -= PREFIX_BONUS
    return score


def rank(inventory: Sequence[LocalRepository], query: str) -> list[LocalRepository]:
    """Filter ``inventory`` by ``query`` and order the survivors by score.

    An empty query returns everything in its original order. Ties are broken
    by relative path so results do not depend on discovery order.
    """

    if not query:
        return list(inventory)
    matched = [repo for repo in inventory if is_fuzzy_match(repo.relative_path, query)]
    matched.sort(key=lambda repo: (compute_score(repo.relative_path, query), repo.relative_path))
    return matched


__all__ = ["is_fuzzy_match", "compute_score", "rank"]
