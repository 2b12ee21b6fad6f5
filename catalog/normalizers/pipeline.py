import logging
from concurrent.futures import ThreadPoolExecutor
from copy import deepcopy
from typing import Any, Iterable, List, Mapping, Optional, Union
from pydantic import ValidationError

from catalog.settings import CLEAN_WORKERS
from .base import Normalizer
from .config import NormalizationConfig, get_config
from .rules import collapse_whitespace, default_stages, is_missing
from .types import BatchResult, CleanRecord, RawRecord, Record, Rejection, TEXT_FIELDS

log = logging.getLogger(__name__)


class RecordRejected(ValueError):
    """A single record cannot be cleaned, e.g. its required id is missing."""
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NormalizerPipeline(Normalizer):
    """
    A chain of normalizers.
    Each stage takes the output of the previous stage; the order is fixed
    at construction and applied identically to every record.
    """
    def __init__(self, stages: List[Normalizer]):
        self.stages = stages

    def normalize_record(self, rec: Record) -> Record:
        out = deepcopy(rec)  # Don't mutate the input
        for stage in self.stages:
            out = stage.normalize_record(out)
        return out


def get_default_normalizer(config: Optional[NormalizationConfig] = None) -> Normalizer:
    """Factory for the default pipeline, built from the shared config unless one is given."""
    return NormalizerPipeline(default_stages(config or get_config()))


def clean_record(raw: Union[RawRecord, Mapping[str, Any]], normalizer: Optional[Normalizer] = None) -> CleanRecord:
    """
    Run one record through the pipeline.
    Raises RecordRejected if `id` is absent, ValidationError if `raw` is not record-shaped.
    """
    if not isinstance(raw, RawRecord):
        raw = RawRecord.model_validate(raw)
    if is_missing(raw.id):
        raise RecordRejected("id", "id is required")

    normalizer = normalizer or get_default_normalizer()
    out = normalizer.normalize_record(raw.model_dump())
    out["id"] = collapse_whitespace(out["id"])
    # fields outside the defaults table end up as empty text, never None
    for field in TEXT_FIELDS:
        if out.get(field) is None:
            out[field] = ""
    return CleanRecord.model_validate(out)


def clean_batch(
    records: Iterable[Union[RawRecord, Mapping[str, Any]]],
    normalizer: Optional[Normalizer] = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Clean a batch. A bad record is reported as a Rejection and the rest carry on.
    Output order matches input order whether run serially or on a thread pool.
    """
    normalizer = normalizer or get_default_normalizer()
    workers = max_workers or CLEAN_WORKERS
    items = list(records)

    def _one(indexed):
        i, rec = indexed
        try:
            return clean_record(rec, normalizer)
        except RecordRejected as e:
            return Rejection(index=i, record_id=_id_of(rec), field=e.field, error=str(e))
        except ValidationError as e:
            return Rejection(index=i, record_id=_id_of(rec), error=str(e))
        except ValueError as e:
            # any other unusable value fails this record only
            log.exception("record %d could not be cleaned", i)
            return Rejection(index=i, record_id=_id_of(rec), error=str(e))

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(_one, enumerate(items)))
    else:
        outcomes = [_one(x) for x in enumerate(items)]

    result = BatchResult()
    for o in outcomes:
        if isinstance(o, Rejection):
            log.warning("record rejected: index=%d id=%r field=%s error=%s",
                        o.index, o.record_id, o.field, o.error)
            result.rejected.append(o)
        else:
            result.cleaned.append(o)
    log.info("batch cleaned: %d ok, %d rejected", len(result.cleaned), len(result.rejected))
    return result


def _id_of(rec) -> Optional[str]:
    if isinstance(rec, RawRecord):
        return rec.id
    if isinstance(rec, Mapping):
        v = rec.get("id", rec.get("show_id"))
        return v if isinstance(v, str) else None
    return None
