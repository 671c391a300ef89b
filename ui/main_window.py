from __future__ import annotations
import sys
from pathlib import Path
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QLabel, QSplitter,
    QFormLayout, QPlainTextEdit, QTableView, QMessageBox, QFileDialog, QStatusBar, QSpinBox,
    QTabWidget, QToolBar, QDialog, QDialogButtonBox
)
from clinic import Clinic
from config import Settings
from domain import Patient, Appointment, OpResult
from ui.table_model import PatientTableModel, AppointmentTableModel


class AppointmentDialog(QDialog):
    def __init__(self, parent=None, initial: Appointment | None = None):
        super().__init__(parent)
        self.setWindowTitle("Appointment")
        self.doctor = QLineEdit()
        self.date = QLineEdit(); self.date.setPlaceholderText("YYYY-MM-DD")
        self.time = QLineEdit(); self.time.setPlaceholderText("HH:MM")
        self.reason = QLineEdit()

        form = QFormLayout()
        form.addRow("Doctor", self.doctor)
        form.addRow("Date", self.date)
        form.addRow("Time", self.time)
        form.addRow("Reason", self.reason)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)

        if initial:
            self.doctor.setText(initial.doctor)
            self.date.setText(initial.date)
            self.time.setText(initial.time)
            self.reason.setText(initial.reason)

    def collect(self) -> dict:
        # date/time are free text; the store does not validate them
        return dict(doctor=self.doctor.text().strip(), date=self.date.text().strip(),
                    time=self.time.text().strip(), reason=self.reason.text().strip())


# ---------- main window ----------
class MainWindow(QMainWindow):
    def __init__(self, clinic: Clinic, settings: Settings):
        super().__init__()
        self.setWindowTitle("Clinic Records")
        self.setMinimumSize(1100, 680)
        self.clinic = clinic
        self.settings = settings
        self.current_patient_id: int | None = None

        self.setStatusBar(QStatusBar(self))

        # search with debounce
        top = QWidget()
        top_l = QHBoxLayout(top)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search patients by name…")
        self.search.setClearButtonEnabled(True)
        top_l.addWidget(QLabel("Search:"))
        top_l.addWidget(self.search, 1)

        # left: patients table
        self.pt_model = PatientTableModel([])
        self.pt_table = self._make_table(self.pt_model)

        # right: tabs
        self.tabs = QTabWidget()
        self.tabs.addTab(self._build_details_tab(), "Details")
        self.tabs.addTab(self._build_appointments_tab(), "Appointments")

        split = QSplitter()
        split.addWidget(self.pt_table)
        split.addWidget(self.tabs)
        split.setStretchFactor(0, 3)
        split.setStretchFactor(1, 5)

        central = QWidget()
        root = QVBoxLayout(central)
        root.addWidget(top)
        root.addWidget(split, 1)
        self.setCentralWidget(central)

        self._build_toolbars()

        self.pt_table.selectionModel().selectionChanged.connect(self._on_patient_select)
        self.ap_table.selectionModel().selectionChanged.connect(lambda *_: self._update_actions())
        self.search.textChanged.connect(self._on_search_changed)

        self._refresh_patients()
        self._new_patient()
        self._update_actions()

    def _make_table(self, model) -> QTableView:
        t = QTableView()
        t.setModel(model)
        t.setSelectionBehavior(QTableView.SelectRows)
        t.setSelectionMode(QTableView.SingleSelection)
        t.verticalHeader().setVisible(False)
        t.setAlternatingRowColors(True)
        return t

    # ----- details tab -----
    def _build_details_tab(self) -> QWidget:
        w = QWidget()
        form = QFormLayout(w)
        self.e_id = QLineEdit(); self.e_id.setReadOnly(True)
        self.e_name = QLineEdit()
        self.e_age = QSpinBox(); self.e_age.setRange(0, 2**31 - 1)
        self.e_gender = QLineEdit()
        self.e_contact = QLineEdit()
        self.e_notes = QPlainTextEdit()
        form.addRow("ID", self.e_id)
        form.addRow("Name *", self.e_name)
        form.addRow("Age", self.e_age)
        form.addRow("Gender", self.e_gender)
        form.addRow("Contact", self.e_contact)
        form.addRow("Notes", self.e_notes)
        return w

    # ----- appointments tab -----
    def _build_appointments_tab(self) -> QWidget:
        w = QWidget()
        l = QVBoxLayout(w)
        l.setContentsMargins(8, 8, 8, 8)
        self.ap_model = AppointmentTableModel([])
        self.ap_table = self._make_table(self.ap_model)
        l.addWidget(self.ap_table, 1)
        hint = QLabel("Use the Appointments toolbar to schedule a visit.")
        hint.setStyleSheet("color:#666;")
        l.addWidget(hint)
        return w

    # ----- toolbars -----
    def _action(self, text: str, slot, shortcut: str | None = None) -> QAction:
        act = QAction(text, self)
        if shortcut:
            act.setShortcut(shortcut)
        act.triggered.connect(slot)
        return act

    def _build_toolbars(self):
        tb_p = QToolBar("Patients")
        self.addToolBar(Qt.TopToolBarArea, tb_p)
        tb_p.addAction(self._action("New", self._new_patient, "Ctrl+N"))
        tb_p.addAction(self._action("Save", self._save_patient, "Ctrl+S"))
        self.act_pat_delete = self._action("Delete", self._delete_patient, "Del")
        tb_p.addAction(self.act_pat_delete)
        tb_p.addSeparator()
        tb_p.addAction(self._action("Export CSV", self._export_patients))

        tb_a = QToolBar("Appointments")
        self.addToolBar(Qt.TopToolBarArea, tb_a)
        self.act_a_add = self._action("Add Appointment", self._add_appointment, "Ctrl+Shift+A")
        self.act_a_edit = self._action("Edit Appointment", self._edit_appointment, "Ctrl+E")
        self.act_a_del = self._action("Delete Appointment", self._delete_appointment, "Ctrl+D")
        for act in (self.act_a_add, self.act_a_edit, self.act_a_del):
            tb_a.addAction(act)
        tb_a.addSeparator()
        tb_a.addAction(self._action("Export CSV", self._export_appointments))

    # ----- helpers -----
    def _debounced(self, fn, ms=250):
        if not hasattr(self, "_debounce"):
            self._debounce = QTimer(self)
            self._debounce.setSingleShot(True)
            self._debounce.timeout.connect(fn)
        self._debounce.start(ms)

    def _on_search_changed(self, _):
        self._debounced(self._refresh_patients, 250)

    def _refresh_patients(self):
        rows = self.clinic.search_patients(self.search.text().strip())
        self.pt_model.set_rows(rows)
        self.statusBar().showMessage(f"{len(rows)} patient(s) shown.", 1500)

    def _refresh_appointments(self):
        if self.current_patient_id is None:
            self.ap_model.set_rows([])
            return
        self.ap_model.set_rows(self.clinic.appointments_for(self.current_patient_id))

    def _selected_appointment(self) -> Appointment | None:
        idxs = self.ap_table.selectionModel().selectedRows()
        if not idxs:
            return None
        return self.ap_model.at(idxs[0].row())

    def _update_actions(self):
        has_patient = self.current_patient_id is not None
        self.act_pat_delete.setEnabled(has_patient)
        self.act_a_add.setEnabled(has_patient)
        has_appt = self._selected_appointment() is not None
        self.act_a_edit.setEnabled(has_appt)
        self.act_a_del.setEnabled(has_appt)

    def _report(self, res: OpResult, title: str) -> bool:
        if res.ok:
            self.statusBar().showMessage(res.message, 2000)
        else:
            QMessageBox.warning(self, title, res.message)
        return res.ok

    # ----- patient flow -----
    def _on_patient_select(self, *_):
        idxs = self.pt_table.selectionModel().selectedRows()
        if not idxs:
            self._new_patient()
            return
        p = self.pt_model.at(idxs[0].row())
        self.current_patient_id = p.id
        self._load_patient_to_ui(p)
        self._refresh_appointments()
        self._update_actions()

    def _load_patient_to_ui(self, p: Patient | None):
        self.e_id.setText(str(p.id) if p else "")
        self.e_name.setText(p.name if p else "")
        self.e_age.setValue(p.age if p else 0)
        self._shown_age = self.e_age.value()
        self.e_gender.setText(p.gender if p else "")
        self.e_contact.setText(p.contact if p else "")
        self.e_notes.setPlainText(p.notes if p else "")

    def _new_patient(self):
        self.current_patient_id = None
        self.pt_table.clearSelection()
        self._load_patient_to_ui(None)
        self.ap_model.set_rows([])
        self._update_actions()

    def _save_patient(self):
        name = self.e_name.text().strip()
        if not name:
            QMessageBox.critical(self, "Validation", "Name is required.")
            return
        values = dict(name=name, age=self.e_age.value(), gender=self.e_gender.text().strip(),
                      contact=self.e_contact.text().strip(), notes=self.e_notes.toPlainText())
        if self.current_patient_id is None:
            res = self.clinic.add_patient(**values)
        else:
            if values["age"] == self._shown_age:
                # untouched spin box; keep the stored age even if it was clamped for display
                values["age"] = None
            res = self.clinic.edit_patient(self.current_patient_id, **values)
        if self._report(res, "Save"):
            self._refresh_patients()
            self.current_patient_id = res.record.id
            self.e_id.setText(str(res.record.id))
            self._shown_age = self.e_age.value()
            self._update_actions()

    def _delete_patient(self):
        if self.current_patient_id is None:
            QMessageBox.information(self, "Delete", "Select a patient first.")
            return
        if QMessageBox.question(self, "Confirm", "Delete this patient and all appointments?") != QMessageBox.Yes:
            return
        self._report(self.clinic.delete_patient(self.current_patient_id), "Delete")
        self._new_patient()
        self._refresh_patients()

    # ----- appointments flow -----
    def _add_appointment(self):
        if self.current_patient_id is None:
            QMessageBox.information(self, "Appointments", "Select a patient first.")
            return
        dlg = AppointmentDialog(self)
        if dlg.exec() == QDialog.Accepted:
            self._report(self.clinic.add_appointment(self.current_patient_id, **dlg.collect()), "Appointments")
            self._refresh_appointments()
            self._update_actions()

    def _edit_appointment(self):
        a = self._selected_appointment()
        if not a:
            QMessageBox.information(self, "Appointments", "Select an appointment first.")
            return
        dlg = AppointmentDialog(self, initial=a)
        if dlg.exec() == QDialog.Accepted:
            self._report(self.clinic.edit_appointment(a.id, **dlg.collect()), "Appointments")
            self._refresh_appointments()

    def _delete_appointment(self):
        a = self._selected_appointment()
        if not a:
            QMessageBox.information(self, "Appointments", "Select an appointment first.")
            return
        if QMessageBox.question(self, "Confirm", "Delete this appointment?") != QMessageBox.Yes:
            return
        self._report(self.clinic.delete_appointment(a.id), "Appointments")
        self._refresh_appointments()
        self._update_actions()

    # ----- export -----
    def _export_patients(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export patients to CSV",
                                              str(self.settings.patients_export_path), "CSV Files (*.csv)")
        if not path: return
        self._report(self.clinic.export_patients(Path(path)), "Export")

    def _export_appointments(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export appointments to CSV",
                                              str(self.settings.appointments_export_path), "CSV Files (*.csv)")
        if not path: return
        self._report(self.clinic.export_appointments(Path(path)), "Export")

    def closeEvent(self, event):
        self.clinic.flush()
        super().closeEvent(event)


def run(settings: Settings):
    clinic = Clinic.open(settings)
    app = QApplication(sys.argv)
    w = MainWindow(clinic, settings)
    w.show()
    sys.exit(app.exec())
