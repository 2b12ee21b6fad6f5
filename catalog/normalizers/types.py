# catalog/normalizers/types.py
from datetime import date
from typing import Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Records travel between stages as plain dicts keyed by field name
Record = Dict[str, Any]

DateStatus = Literal["parsed", "unparsed"]

# Free-text fields of a catalog entry (everything except id / release_year)
TEXT_FIELDS = (
    "kind", "title", "director", "cast", "country",
    "rating", "duration", "genres", "description",
)
# Fields that get word-by-word title casing
TITLE_CASE_FIELDS = ("title", "director", "cast", "country", "genres")


class RawRecord(BaseModel):
    """
    One catalog entry as ingested. Every field is optional text;
    CSV headers (show_id, type, listed_in) are accepted as aliases.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: Optional[str] = Field(None, alias="show_id")
    kind: Optional[str] = Field(None, alias="type")
    title: Optional[str] = None
    director: Optional[str] = None
    cast: Optional[str] = None
    country: Optional[str] = None
    date_added: Optional[str] = None
    release_year: Optional[Union[int, str]] = None
    rating: Optional[str] = None
    duration: Optional[str] = None
    genres: Optional[str] = Field(None, alias="listed_in")
    description: Optional[str] = None


class DateAdded(BaseModel):
    """Outcome of date parsing. status == "unparsed" keeps the source text in `raw`."""
    model_config = ConfigDict(frozen=True)

    raw: str
    value: Optional[date] = None
    status: DateStatus = "unparsed"

    @property
    def parsed(self) -> bool:
        return self.status == "parsed"


class CleanRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: str
    title: str
    director: str
    cast: str
    country: str
    date_added: DateAdded
    release_year: Optional[int] = None
    rating: str
    duration: str
    duration_minutes: Optional[int] = None
    season_count: Optional[int] = None
    genres: str
    description: str

    def to_raw(self) -> RawRecord:
        """Return this record in input shape, so it can be fed back through cleaning."""
        data = self.model_dump(exclude={"date_added", "duration_minutes", "season_count"})
        data["date_added"] = self.date_added.raw
        return RawRecord.model_validate(data)


class Rejection(BaseModel):
    index: int
    record_id: Optional[str] = None
    field: Optional[str] = None
    error: str


class BatchResult(BaseModel):
    cleaned: list[CleanRecord] = []
    rejected: list[Rejection] = []
