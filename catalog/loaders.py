import csv
import logging
from pathlib import Path
from typing import Iterator

from catalog.normalizers.types import RawRecord

log = logging.getLogger(__name__)


def read_catalog_csv(path: Path, encoding: str = "utf-8-sig") -> Iterator[RawRecord]:
    """
    Yield one RawRecord per CSV row. Empty cells become None so the
    pipeline's missing-value defaults apply. Header names follow the
    catalog export (show_id, type, title, ..., listed_in, description).
    """
    with open(path, newline="", encoding=encoding) as fh:
        rows = 0
        for row in csv.DictReader(fh):
            rows += 1
            yield RawRecord.model_validate({k: (v if v != "" else None) for k, v in row.items() if k})
        log.info("read %d rows from %s", rows, path)
