import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog.db import get_db
from catalog.repositories import upsert_titles
from catalog.normalizers import clean_batch, get_default_normalizer

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["ingest"])


def _check_payload(payload: Any) -> None:
    if not isinstance(payload, list) or not payload:
        raise HTTPException(400, "Payload must be a non-empty JSON array")


@router.post("/clean")
def clean(payload: List[Dict[str, Any]]):
    """
    Run raw catalog records through the normalization pipeline without storing them.

    Returns:
        {
          "ok": True,
          "cleaned": <count of cleaned records>,
          "failed": <count of rejected records>,
          "records": [ ... cleaned records, input order ... ],
          "errors": [ ... up to 10 rejections ... ]
        }
    """
    _check_payload(payload)
    result = clean_batch(payload, normalizer=get_default_normalizer())
    return {
        "ok": True,
        "cleaned": len(result.cleaned),
        "failed": len(result.rejected),
        "records": [r.model_dump(mode="json") for r in result.cleaned],
        "errors": [e.model_dump() for e in result.rejected[:10]],  # limit size of error list
    }


@router.post("/ingest")
def ingest(payload: List[Dict[str, Any]], db: Session = Depends(get_db)):
    """
    Clean and upsert raw catalog records into the titles table.

    Rejected records (e.g. missing show_id) are reported and skipped;
    they never block the rest of the batch.
    """
    _check_payload(payload)
    result = clean_batch(payload, normalizer=get_default_normalizer())

    try:
        ok, db_errors = upsert_titles(db, result.cleaned)
        db.commit()
    except Exception as e:
        db.rollback()
        log.exception("ingest failed")
        raise HTTPException(500, f"Ingest failed: {e}")

    errors = [e.model_dump() for e in result.rejected] + db_errors
    return {
        "ok": True,
        "ingested": ok,
        "failed": len(errors),
        "errors": errors[:10],
    }
