import logging
from typing import Iterable
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.orm import Session
from catalog.models import Title
from catalog.normalizers.types import CleanRecord, DateAdded

log = logging.getLogger(__name__)

def upsert_titles(db: Session, records: Iterable[CleanRecord]) -> tuple[int, list[dict]]:
    """
    Idempotent upsert by show_id.
    If the id exists -> update that row; else create a new row.
    """
    ok = 0
    errors: list[dict] = []

    for rec in records:
        try:
            # per-record savepoint so one bad record doesn't poison the batch
            with db.begin_nested():
                row = db.get(Title, rec.id)
                if row is None:
                    row = Title(show_id=rec.id)

                row.kind              = rec.kind
                row.title             = rec.title
                row.director          = rec.director
                row.cast              = rec.cast
                row.country           = rec.country
                row.date_added        = rec.date_added.value
                row.date_added_raw    = rec.date_added.raw
                row.date_added_status = rec.date_added.status
                row.release_year      = rec.release_year
                row.rating            = rec.rating
                row.duration          = rec.duration
                row.duration_minutes  = rec.duration_minutes
                row.season_count      = rec.season_count
                row.genres            = rec.genres
                row.description       = rec.description

                db.merge(row)
            ok += 1

        except (IntegrityError, StatementError, TypeError, ValueError) as e:
            # the savepoint is already rolled back; earlier rows stay pending
            log.exception("title upsert failed: show_id=%s", rec.id)
            errors.append({"show_id": rec.id, "error": str(e)})

    return ok, errors


def title_to_record(row: Title) -> CleanRecord:
    """Rebuild the CleanRecord a row was stored from."""
    return CleanRecord(
        id=row.show_id,
        kind=row.kind or "",
        title=row.title or "",
        director=row.director or "",
        cast=row.cast or "",
        country=row.country or "",
        date_added=DateAdded(
            raw=row.date_added_raw or "",
            value=row.date_added,
            status=row.date_added_status or "unparsed",
        ),
        release_year=row.release_year,
        rating=row.rating or "",
        duration=row.duration or "",
        duration_minutes=row.duration_minutes,
        season_count=row.season_count,
        genres=row.genres or "",
        description=row.description or "",
    )
