"""
Reservation endpoints.

Booking is public; listing and status changes are admin only. Confirming
a reservation emails the guest after the response is sent, and a failed
email never fails the update.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.core.config import get_settings
from aroma.database import get_db
from aroma.repositories.reservations import ReservationRepository
from aroma.schemas import (
    PaginatedResponse,
    ReservationCreate,
    ReservationOut,
    ReservationStatus,
    ReservationUpdate,
)
from aroma.services.notifications import BaseNotificationService, get_notification_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reservations", tags=["Reservations"])


async def send_confirmation_email(
    notifications: BaseNotificationService,
    reservation: dict[str, Any],
) -> None:
    """Background task; failures are logged and dropped."""
    try:
        result = await notifications.send_reservation_confirmation(
            customer_name=reservation.get("name") or "Customer",
            customer_email=reservation["email"],
            reservation_date=reservation["date"],
            reservation_time=reservation.get("time", ""),
            guests=reservation.get("guests", 1),
            restaurant_name=get_settings().restaurant_name,
        )
    except Exception as e:
        logger.exception(f"Confirmation email for reservation {reservation.get('id')} failed: {e}")
        return

    if result.success:
        logger.info(f"Confirmation email sent for reservation {reservation.get('id')}")
    else:
        logger.warning(
            f"Confirmation email for reservation {reservation.get('id')} "
            f"not sent ({result.provider}): {result.error_message}"
        )


@router.post("", response_model=ReservationOut, status_code=status.HTTP_201_CREATED)
def create_reservation(payload: ReservationCreate, db: Database = Depends(get_db)) -> dict[str, Any]:
    return ReservationRepository(db).create(payload)


@router.get(
    "",
    response_model=PaginatedResponse[ReservationOut],
    dependencies=[Depends(require_admin)],
)
def list_reservations(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = Query(None),
    reservation_status: Optional[ReservationStatus] = Query(None, alias="status"),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return ReservationRepository(db).paginate(
        page=page, limit=limit, search=search, status=reservation_status
    )


@router.get(
    "/{reservation_id}",
    response_model=ReservationOut,
    dependencies=[Depends(require_admin)],
)
def get_reservation(reservation_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    return ReservationRepository(db).get(reservation_id)


@router.patch(
    "/{reservation_id}",
    response_model=ReservationOut,
    dependencies=[Depends(require_admin)],
)
def update_reservation(
    reservation_id: str,
    payload: ReservationUpdate,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    notifications: BaseNotificationService = Depends(get_notification_service),
) -> dict[str, Any]:
    reservation = ReservationRepository(db).update(reservation_id, payload)
    if payload.status is ReservationStatus.CONFIRMED and reservation.get("email"):
        background_tasks.add_task(send_confirmation_email, notifications, reservation)
    return reservation
