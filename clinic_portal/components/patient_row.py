from dataclasses import dataclass
from typing import Optional, Union

from ..schemas.appointment import Appointment

# Columns of the doctor dashboard's appointment table
PATIENT_TABLE_COLUMNS = ("Patient ID", "Name", "Phone", "Email", "Appointment")


@dataclass
class PatientRow:
    patient_id: Optional[Union[int, str]]
    name: str
    phone: str
    email: str
    appointment_id: Optional[Union[int, str]]
    time: str


def build_patient_row(appointment: Appointment) -> PatientRow:
    time = appointment.appointment_time.strftime("%H:%M") if appointment.appointment_time else ""
    return PatientRow(
        patient_id=appointment.patient_id,
        name=appointment.full_patient_name,
        phone=appointment.patient_phone or "",
        email=appointment.patient_email or "",
        appointment_id=appointment.id,
        time=time,
    )
