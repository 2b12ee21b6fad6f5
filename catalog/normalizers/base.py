# catalog/normalizers/base.py
from typing import Protocol
from .types import Record

class Normalizer(Protocol):
    def normalize_record(self, rec: Record) -> Record:
        """Return a NEW normalized record. Do not mutate `rec`."""
        ...
