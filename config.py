from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

PATIENTS_FILE = "patients.txt"
APPOINTMENTS_FILE = "appointments.txt"

PATIENTS_EXPORT = "patients_export.csv"
APPOINTMENTS_EXPORT = "appointments_export.csv"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Settings:
    # Backing and export files live side by side in one directory.
    data_dir: Path = Path(".")

    @property
    def patients_path(self) -> Path:
        return self.data_dir / PATIENTS_FILE

    @property
    def appointments_path(self) -> Path:
        return self.data_dir / APPOINTMENTS_FILE

    @property
    def patients_export_path(self) -> Path:
        return self.data_dir / PATIENTS_EXPORT

    @property
    def appointments_export_path(self) -> Path:
        return self.data_dir / APPOINTMENTS_EXPORT
