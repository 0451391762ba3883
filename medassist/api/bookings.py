"""Bookings API: accepts appointment bookings without persisting them."""

import logging
import time
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from medassist.schemas.records import BookingConfirmation, BookingRequest

logger = logging.getLogger(__name__)
router = APIRouter(tags=["bookings"])


def _error(status_code: int, message: str) -> JSONResponse:
    body = BookingConfirmation(id="", status="error", message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


@router.post("/bookings", response_model=BookingConfirmation)
async def create_booking(booking: BookingRequest):
    """Create a booking.

    Returns 400 with an error confirmation when a required field is blank.
    """
    logger.info("POST /bookings - Request received")
    try:
        missing = booking.missing_fields()
        if missing:
            logger.warning(f"Booking rejected, missing fields: {missing}")
            return _error(400, "Missing required fields")

        booking_id = f"BK{int(time.time() * 1000)}"
        logger.info(f"Booking created: {booking_id} for {booking.patient_name}")
        return BookingConfirmation(
            id=booking_id,
            status="confirmed",
            message="Appointment booked successfully via REST API",
        )
    except Exception as e:
        logger.error(f"Error processing booking: {e}")
        return _error(500, f"Server error: {e}")
