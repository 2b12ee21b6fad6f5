from copy import deepcopy
from datetime import date, datetime
import re
from typing import Mapping, Optional, Sequence, Tuple
from .base import Normalizer
from .config import NormalizationConfig
from .types import DateAdded, Record, TEXT_FIELDS, TITLE_CASE_FIELDS

_WS = re.compile(r"\s+")
_MINUTES = re.compile(r"^\s*([0-9]{1,9})\s*min\s*$", re.IGNORECASE)
_SEASONS = re.compile(r"^\s*([0-9]{1,9})\s*seasons?\s*$", re.IGNORECASE)
_YEAR = re.compile(r"[0-9]{1,9}")


# --- Stage 1: missing values ---

class MissingValueNormalizer(Normalizer):
    """Replace absent or blank values with the configured per-field default."""
    def __init__(self, defaults: Mapping[str, str]):
        self.defaults = defaults

    def normalize_record(self, rec: Record) -> Record:
        r = deepcopy(rec)
        for field, default in self.defaults.items():
            if is_missing(r.get(field)):
                r[field] = default
        return r


# --- Stages 2-3: trim and collapse ---

class WhitespaceNormalizer(Normalizer):
    """Trim every text field and collapse interior whitespace runs to one space."""
    def __init__(self, fields: Sequence[str] = TEXT_FIELDS + ("date_added",)):
        self.fields = fields

    def normalize_record(self, rec: Record) -> Record:
        r = deepcopy(rec)
        for field in self.fields:
            if isinstance(r.get(field), str):
                r[field] = collapse_whitespace(r[field])
        return r


# --- Stage 4: canonical spellings ---

class AliasNormalizer(Normalizer):
    """
    Rewrite each comma-separated token of `field` that exactly matches
    an alias key. Must run before title casing so keys like "USA" still match.
    """
    def __init__(self, aliases: Mapping[str, str], field: str = "country", default: Optional[str] = None):
        self.aliases = aliases
        self.field = field
        # used when the field holds only separators, e.g. " , "
        self.default = default

    def normalize_record(self, rec: Record) -> Record:
        r = deepcopy(rec)
        if isinstance(r.get(self.field), str):
            r[self.field] = canonicalize(r[self.field], self.aliases) or self.default or ""
        return r


# --- Stage 5: title case ---

class TitleCaseNormalizer(Normalizer):
    def __init__(self, fields: Sequence[str] = TITLE_CASE_FIELDS):
        self.fields = fields

    def normalize_record(self, rec: Record) -> Record:
        r = deepcopy(rec)
        for field in self.fields:
            if isinstance(r.get(field), str):
                r[field] = title_case(r[field])
        return r


# --- Stage 6: typed fields ---

class TypedFieldNormalizer(Normalizer):
    """
    Derive typed values: date_added becomes a DateAdded, duration yields
    duration_minutes / season_count, release_year becomes an int or None.
    Malformed text is never an error here.
    """
    def __init__(self, date_formats: Sequence[str]):
        self.date_formats = tuple(date_formats)

    def normalize_record(self, rec: Record) -> Record:
        r = deepcopy(rec)
        r["date_added"] = parse_date(r.get("date_added"), self.date_formats)
        minutes, seasons = parse_duration(r.get("duration"))
        r["duration_minutes"] = minutes
        r["season_count"] = seasons
        r["release_year"] = parse_year(r.get("release_year"))
        return r


# --- Individual field helpers ---

def is_missing(v) -> bool:
    """None, empty and whitespace-only strings all count as absent."""
    return v is None or (isinstance(v, str) and not v.strip())

def collapse_whitespace(s: str) -> str:
    """Trim, then squeeze every whitespace run to a single space. Idempotent."""
    return _WS.sub(" ", s.strip())

def title_case(s: str) -> str:
    """
    Upper-case the first character of each space-separated word and lower-case
    the rest. Lossy on purpose: "USA" -> "Usa", "O'NEIL" -> "O'neil".
    Casing a word twice settles characters whose case mapping changes length
    ("ßeta" -> "SSeta" -> "Sseta"), which keeps the result idempotent.
    """
    words = (_cap(_cap(w)) for w in s.split(" ") if w)
    return " ".join(words).strip()

def _cap(w: str) -> str:
    return w[:1].upper() + w[1:].lower()

def canonicalize(s: str, aliases: Mapping[str, str]) -> str:
    """Exact-match alias lookup per comma-separated token; empty tokens are dropped."""
    tokens = [t.strip() for t in s.split(",")]
    return ", ".join(aliases.get(t, t) for t in tokens if t)

def parse_date(text: Optional[str], formats: Sequence[str]) -> DateAdded:
    """First format that parses wins. Otherwise the result is marked unparsed."""
    raw = collapse_whitespace(text) if isinstance(text, str) else ""
    for fmt in formats:
        try:
            value: date = datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
        return DateAdded(raw=raw, value=value, status="parsed")
    return DateAdded(raw=raw, status="unparsed")

def parse_duration(text: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """Return (minutes, seasons); at most one is set, both None for anything else."""
    if not isinstance(text, str):
        return None, None
    m = _MINUTES.match(text)
    if m:
        return int(m.group(1)), None
    m = _SEASONS.match(text)
    if m:
        return None, int(m.group(1))
    return None, None

def parse_year(v) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    # ASCII digits only; "²".isdigit() is True but int() rejects it
    if isinstance(v, str) and _YEAR.fullmatch(v.strip()):
        return int(v.strip())
    return None


def default_stages(config: NormalizationConfig) -> list[Normalizer]:
    """Stages in their fixed order: substitute, trim/collapse, alias, title case, typed."""
    return [
        MissingValueNormalizer(config.missing_defaults),
        WhitespaceNormalizer(),
        AliasNormalizer(config.aliases, default=config.missing_defaults.get("country")),
        TitleCaseNormalizer(),
        TypedFieldNormalizer(config.date_formats),
    ]
