from .pipeline import get_default_normalizer, NormalizerPipeline, RecordRejected, clean_record, clean_batch
from .rules import (
    MissingValueNormalizer,
    WhitespaceNormalizer,
    AliasNormalizer,
    TitleCaseNormalizer,
    TypedFieldNormalizer,
)
from .config import NormalizationConfig, get_config, load_config, reload_config
from .types import RawRecord, CleanRecord, DateAdded, Rejection, BatchResult, Record
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "NormalizerPipeline",
    "RecordRejected",
    "clean_record",
    "clean_batch",
    "MissingValueNormalizer",
    "WhitespaceNormalizer",
    "AliasNormalizer",
    "TitleCaseNormalizer",
    "TypedFieldNormalizer",
    "NormalizationConfig",
    "get_config",
    "load_config",
    "reload_config",
    "RawRecord",
    "CleanRecord",
    "DateAdded",
    "Rejection",
    "BatchResult",
    "Record",
    "Normalizer",
]
