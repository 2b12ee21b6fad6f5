from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session
from sqlalchemy import func

from catalog.db import get_db
from catalog.models import Title
from catalog.repositories import title_to_record
from catalog.reports import count_by, top_values

router = APIRouter(prefix="", tags=["read"])

# -------------------------------------------------------------------
# Helper serializer: turn ORM objects into plain dicts for JSON
# -------------------------------------------------------------------
def _title_to_dict(t: Title) -> Dict[str, Any]:
    return title_to_record(t).model_dump(mode="json")

# -------------------------------------------------------------------
# List / lookup endpoints
# -------------------------------------------------------------------
@router.get("/titles")
def list_titles(
    kind: Optional[str] = Query(None, description="Exact kind match (Movie, TV Show)"),
    country: Optional[str] = Query(None, description="Country contains, case-insensitive"),
    genre: Optional[str] = Query(None, description="Genre contains, case-insensitive"),
    limit: int = Query(100, ge=1, le=2000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    """List titles with optional filters on kind, country and genre."""
    q = db.query(Title)
    if kind:
        q = q.filter(Title.kind == kind)
    if country:
        q = q.filter(func.lower(Title.country).like(f"%{country.lower()}%"))
    if genre:
        q = q.filter(func.lower(Title.genres).like(f"%{genre.lower()}%"))
    q = q.order_by(Title.show_id).offset(offset).limit(limit)
    return [_title_to_dict(t) for t in q.all()]

@router.get("/titles/{show_id}")
def get_title(show_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    t = db.get(Title, show_id)
    if not t:
        raise HTTPException(404, "Title not found")
    return _title_to_dict(t)

# -------------------------------------------------------------------
# Aggregates, computed over cleaned records
# -------------------------------------------------------------------
@router.get("/stats/kinds")
def stats_kinds(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Number of titles per kind."""
    rows = [title_to_record(t) for t in db.query(Title).all()]
    return [{"kind": k, "count": n} for k, n in count_by(rows, "kind")]

@router.get("/stats/top/{field}")
def stats_top(
    field: str = Path(..., pattern="^(director|cast|country|genres)$"),
    n: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    """Top-N values of a multi-valued field, each comma-separated entry counted once."""
    rows = [title_to_record(t) for t in db.query(Title).all()]
    return [{"value": v, "count": c} for v, c in top_values(rows, field, n)]
