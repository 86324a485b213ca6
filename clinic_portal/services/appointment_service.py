from datetime import date
from typing import List, Optional, Union
import logging

from .api_client import ApiClient, parse_records, result_message
from ..schemas.appointment import Appointment, AppointmentBooking
from ..schemas.common import ActionResult

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all_appointments(
        self,
        day: date,
        patient_name: Optional[str],
        token: str,
    ) -> List[Appointment]:
        """Fetch a doctor's appointments for one day, optionally by patient name."""
        params = {"date": day.isoformat()}
        if patient_name:
            params["patientName"] = patient_name

        body = await self.client.get("/appointments", token=token, params=params)
        return parse_records(Appointment, body, "appointments")

    async def book_appointment(self, booking: AppointmentBooking, token: str) -> ActionResult:
        body = await self.client.post("/appointments", json=booking.to_payload(), token=token)
        logger.info(
            f"Appointment booked with doctor {booking.doctor_id} "
            f"at {booking.appointment_time.isoformat()}"
        )
        return ActionResult(
            success=True,
            message=result_message(body, "Appointment booked successfully"),
        )

    async def cancel_appointment(self, appointment_id: Union[int, str], token: str) -> ActionResult:
        body = await self.client.delete(f"/appointments/{appointment_id}", token=token)
        logger.info(f"Appointment {appointment_id} cancelled")
        return ActionResult(
            success=True,
            message=result_message(body, "Appointment cancelled successfully"),
        )
