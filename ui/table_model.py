# ui/table_model.py
from __future__ import annotations
from typing import List
from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
from domain import Patient, Appointment


class _RecordTableModel(QAbstractTableModel):
    """Read-only model over a list of records; subclasses pick headers and cells."""
    headers: list[str] = []

    def __init__(self, rows: List | None = None, parent=None):
        super().__init__(parent)
        self.rows: List = rows or []

    # external helpers
    def set_rows(self, rows: List | None):
        self.beginResetModel()
        self.rows = rows or []
        self.endResetModel()

    def at(self, row: int):
        return self.rows[row]

    def cells(self, r) -> list:
        raise NotImplementedError

    # Qt model API
    def rowCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self.rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 0 if parent.isValid() else len(self.headers)

    def data(self, idx: QModelIndex, role=Qt.DisplayRole):
        if not idx.isValid() or idx.row() < 0 or idx.row() >= len(self.rows):
            return None
        if role in (Qt.DisplayRole, Qt.EditRole):
            return self.cells(self.rows[idx.row()])[idx.column()]
        return None

    def headerData(self, section: int, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self.headers[section]
        return section + 1  # row header: 1-based

    def flags(self, idx: QModelIndex):
        if not idx.isValid():
            return Qt.ItemIsEnabled
        # read-only (edits happen in the form / dialog)
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable


class PatientTableModel(_RecordTableModel):
    """Column order: 0=ID, 1=Name, 2=Age, 3=Gender, 4=Contact, 5=Notes"""
    headers = ["ID", "Name", "Age", "Gender", "Contact", "Notes"]

    def cells(self, p: Patient) -> list:
        return [p.id, p.name, p.age, p.gender, p.contact, p.notes.replace("\n", " ")[:120]]


class AppointmentTableModel(_RecordTableModel):
    headers = ["ID", "Patient", "Doctor", "Date", "Time", "Reason"]

    def cells(self, a: Appointment) -> list:
        return [a.id, a.patient_id, a.doctor, a.date, a.time, a.reason]
