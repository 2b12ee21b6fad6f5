"""
Downstream aggregations over cleaned catalog records.

These never touch the pipeline: they assume CleanRecord guarantees
(defaults filled in, casing and whitespace normalized, canonical countries)
and stay simple because of them.
"""
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from catalog.normalizers.types import CleanRecord

LIST_FIELDS = ("director", "cast", "country", "genres")


def split_values(text: str) -> List[str]:
    """Expand a comma-separated field into its atomic values."""
    return [t.strip() for t in text.split(",") if t.strip()]


def count_by(records: Iterable[CleanRecord], field: str) -> List[Tuple[str, int]]:
    """Group-by count on a single-valued field, most common first."""
    return Counter(getattr(r, field) for r in records).most_common()


def top_values(
    records: Iterable[CleanRecord],
    field: str,
    n: int = 10,
    exclude: Sequence[str] = ("Unknown",),
) -> List[Tuple[str, int]]:
    """Top-N values of a list-valued field (director, cast, country, genres)."""
    if field not in LIST_FIELDS:
        raise ValueError(f"{field!r} is not a list-valued field")
    counts: Counter = Counter()
    for r in records:
        counts.update(v for v in split_values(getattr(r, field)) if v not in exclude)
    return counts.most_common(n)


def categorize_by_keywords(
    records: Iterable[CleanRecord],
    keywords: Sequence[str] = ("kill", "violence"),
    match_label: str = "Bad",
    default_label: str = "Good",
) -> dict:
    """Label each record by whether its description mentions any keyword; return counts per label."""
    lowered = [k.lower() for k in keywords]
    counts = {match_label: 0, default_label: 0}
    for r in records:
        text = r.description.lower()
        label = match_label if any(k in text for k in lowered) else default_label
        counts[label] += 1
    return counts


def longest_movie(records: Iterable[CleanRecord]) -> Optional[CleanRecord]:
    movies = [r for r in records if r.duration_minutes is not None]
    return max(movies, key=lambda r: r.duration_minutes, default=None)
