import pytest

from clinic_portal.components.doctor_card import build_doctor_card
from clinic_portal.components.header import build_header
from clinic_portal.components.patient_row import PATIENT_TABLE_COLUMNS, build_patient_row
from clinic_portal.core.security import SessionExpiredError, UserRole
from clinic_portal.schemas.appointment import Appointment
from clinic_portal.schemas.doctor import Doctor

from .conftest import doctor_smith


def labels(header):
    return [item.label for item in header.nav]


class TestHeader:

    def test_root_shows_logo_only(self):
        header = build_header("/", UserRole.ADMIN, None)
        assert header.nav == []
        assert header.title == "Hospital CMS"
        assert header.logo.endswith("logo.svg")

    def test_admin_nav(self):
        header = build_header("/admin/dashboard", UserRole.ADMIN, "token")
        assert labels(header) == ["Add Doctor", "Logout"]
        assert header.nav[0].dialog == "addDoctor"
        assert header.nav[1].href == "/auth/logout"

    def test_doctor_nav(self):
        header = build_header("/doctor/dashboard", UserRole.DOCTOR, "token")
        assert labels(header) == ["Home", "Logout"]

    def test_patient_nav(self):
        header = build_header("/patient/dashboard", UserRole.PATIENT, None)
        assert labels(header) == ["Login", "Sign Up"]

    def test_logged_patient_nav(self):
        header = build_header("/patient/home", UserRole.LOGGED_PATIENT, "token")
        assert labels(header) == ["Home", "Appointments", "Logout"]
        assert header.nav[2].href == "/auth/patient/logout"

    def test_no_role_nav(self):
        header = build_header("/patient/dashboard", None, None)
        assert labels(header) == ["Home", "Select Role"]

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.DOCTOR, UserRole.LOGGED_PATIENT])
    def test_missing_token_expires_session(self, role):
        with pytest.raises(SessionExpiredError):
            build_header("/anywhere", role, None)


class TestDoctorCard:

    def test_lines(self):
        card = build_doctor_card(Doctor.model_validate(doctor_smith), UserRole.PATIENT)
        assert card.name == "John Smith"
        assert card.lines == [
            "Specialty: Cardiologist",
            "Email: smith@clinic.com",
            "Available: 09:00-10:00, 10:00-11:00",
        ]

    def test_admin_gets_confirmed_delete(self):
        card = build_doctor_card(Doctor.model_validate(doctor_smith), UserRole.ADMIN)
        assert card.action.kind == "delete"
        assert card.action.href == "/admin/doctors/1/delete"
        assert card.action.confirm == "Are you sure you want to delete Dr. John Smith?"

    def test_logged_patient_books(self):
        card = build_doctor_card(Doctor.model_validate(doctor_smith), UserRole.LOGGED_PATIENT)
        assert card.action.label == "Book Appointment"
        assert card.action.href == "/patient/doctors/1/book"

    @pytest.mark.parametrize("role", [UserRole.PATIENT, None])
    def test_others_are_prompted_to_log_in(self, role):
        card = build_doctor_card(Doctor.model_validate(doctor_smith), role)
        assert card.action.label == "Book Now"
        assert card.action.kind == "login"
        assert card.action.href is None


class TestPatientRow:

    def test_first_and_last_name(self):
        row = build_patient_row(Appointment.model_validate({
            "id": 9,
            "patientId": 4,
            "patientFirstName": "Ann",
            "patientLastName": "Patient",
            "patientEmail": "ann@example.com",
            "appointmentTime": "2030-01-15T14:30:00",
        }))
        assert row.name == "Ann Patient"
        assert row.patient_id == 4
        assert row.phone == ""
        assert row.time == "14:30"

    def test_single_name_field(self):
        row = build_patient_row(Appointment.model_validate({"id": 9, "patientName": "Bob"}))
        assert row.name == "Bob"
        assert row.time == ""

    def test_columns(self):
        assert PATIENT_TABLE_COLUMNS == ("Patient ID", "Name", "Phone", "Email", "Appointment")
