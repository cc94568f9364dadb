"""Ranking of tabset names for selection prompts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz.fuzz import WRatio

MIN_FUZZY_SCORE = 60.0


@dataclass(frozen=True)
class ScoredName:
    name: str
    score: float


def _normalize(query: str) -> str:
    return query.strip().lower()


def filter_and_rank(names: Sequence[str], query: str) -> list[str]:
    q = _normalize(query)
    if not q:
        return list(names)

    scored: list[ScoredName] = []
    for name in names:
        text = name.lower()
        if q in text:
            bonus = 10.0 if text.startswith(q) else 0.0
            scored.append(ScoredName(name=name, score=100.0 + bonus))
            continue
        score = float(WRatio(q, text))
        if score >= MIN_FUZZY_SCORE:
            scored.append(ScoredName(name=name, score=score))

    scored.sort(key=lambda item: (-item.score, item.name))
    return [item.name for item in scored]
