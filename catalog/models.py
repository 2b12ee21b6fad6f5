from sqlalchemy import Column, String, Integer, Date, Text
from .db import Base

# -----------------------------
# ORM model for the cleaned catalog
# -----------------------------
class Title(Base):
    __tablename__ = "titles"
    # One movie or TV show, as produced by the normalization pipeline
    show_id          = Column(String, primary_key=True)
    kind             = Column(String, index=True)            # Movie / TV Show
    title            = Column(String, nullable=False)
    director         = Column(Text)                           # comma-separated
    cast             = Column(Text)                           # comma-separated
    country          = Column(Text, index=True)               # canonical, comma-separated
    date_added       = Column(Date)                           # NULL when unparsed
    date_added_raw   = Column(String)
    date_added_status= Column(String)                         # parsed / unparsed
    release_year     = Column(Integer)
    rating           = Column(String)
    duration         = Column(String)
    duration_minutes = Column(Integer)                        # movies only
    season_count     = Column(Integer)                        # TV shows only
    genres           = Column(Text)                           # comma-separated
    description      = Column(Text)

    def __repr__(self):
        return f"<Title(show_id={self.show_id}, title={self.title}, kind={self.kind})>"
