# catalog/normalizers/config.py
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, field_validator

from catalog.settings import NORMALIZATION_CONFIG

log = logging.getLogger(__name__)

DEFAULT_MISSING = {
    "director": "Unknown",
    "cast": "Unknown",
    "country": "Unknown",
    "rating": "Not Rated",
    "duration": "Unknown",
}


class NormalizationConfig(BaseModel):
    """
    Lookup tables the rule stages read from.
    Loaded once per run and shared read-only between workers.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    # exact, case-sensitive value -> canonical spelling
    aliases: Mapping[str, str] = {}
    # strptime patterns, tried in order
    date_formats: Tuple[str, ...] = ("%Y-%m-%d", "%B %d, %Y")
    missing_defaults: Mapping[str, str] = DEFAULT_MISSING

    @field_validator("aliases", "missing_defaults")
    @classmethod
    def _read_only(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        # frozen only blocks attribute assignment, not dict item assignment
        return MappingProxyType(dict(v))


def load_config(path: Optional[Path] = None) -> NormalizationConfig:
    """Read a NormalizationConfig from JSON. Raises ValidationError on a malformed file."""
    path = Path(path or NORMALIZATION_CONFIG)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    cfg = NormalizationConfig.model_validate(data)
    log.info("normalization config loaded from %s (%d aliases, %d date formats)",
             path, len(cfg.aliases), len(cfg.date_formats))
    return cfg


# Process-wide instance, loaded on first use
_config: Optional[NormalizationConfig] = None


def get_config() -> NormalizationConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(path: Optional[Path] = None) -> NormalizationConfig:
    global _config
    _config = load_config(path)
    return _config
