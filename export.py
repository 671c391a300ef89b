from __future__ import annotations
import csv
from pathlib import Path
from typing import Sequence

from domain import Patient, Appointment, to_fields
from logconf import get_logger

log = get_logger(__name__)


def export_csv(records: Sequence[Patient | Appointment], destination: Path,
               record_type: type[Patient] | type[Appointment]) -> int:
    """
    Write records as CSV: a plain header row, then every field double-quoted
    with embedded quotes doubled. Newlines inside a field are written as-is.
    Returns the number of data rows written.
    """
    with open(destination, "w", newline="", encoding="utf-8") as f:
        f.write(",".join(record_type.FIELDS) + "\n")
        w = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for r in records:
            w.writerow(to_fields(r))
    log.info("exported %d %s record(s) to %s", len(records), record_type.__name__.lower(), destination)
    return len(records)
