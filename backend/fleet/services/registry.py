"""
Vehicle registry: register vehicles and look them up by id.

Vehicles are immutable once registered; deliveries only reference them to
check payload capacity at creation time.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from django.db import DatabaseError, IntegrityError, transaction

from core.errors import DuplicatePlateNumber, PersistenceError, UnknownVehicle, VehicleFieldError
from core.money import ZERO, d, q3

from ..models import Vehicle

logger = logging.getLogger(__name__)


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _clean_payload(value: Any) -> Decimal:
    if value is None or isinstance(value, bool) or _clean_text(value) == "":
        raise VehicleFieldError("Maximum payload in kg is required.", field="maxPayloadKg")
    try:
        payload = d(_clean_text(value) if isinstance(value, str) else value)
    except (InvalidOperation, ValueError, TypeError):
        raise VehicleFieldError("Maximum payload must be a number.", field="maxPayloadKg")
    if not payload.is_finite():
        raise VehicleFieldError("Maximum payload must be a number.", field="maxPayloadKg")
    if payload < ZERO:
        raise VehicleFieldError("Maximum payload cannot be negative.", field="maxPayloadKg")
    return q3(payload)


def _parse_id(vehicle_id: Any) -> Optional[uuid.UUID]:
    if isinstance(vehicle_id, uuid.UUID):
        return vehicle_id
    try:
        return uuid.UUID(_clean_text(vehicle_id))
    except (ValueError, AttributeError):
        return None


def get_vehicle_by_id(vehicle_id: Any) -> Optional[Vehicle]:
    """Return the vehicle or None; malformed ids are simply not found."""
    pk = _parse_id(vehicle_id)
    if pk is None:
        return None
    return Vehicle.objects.filter(pk=pk).first()


def require_vehicle(vehicle_id: Any) -> Vehicle:
    vehicle = get_vehicle_by_id(vehicle_id)
    if vehicle is None:
        raise UnknownVehicle(vehicle_id)
    return vehicle


def list_vehicles() -> List[Vehicle]:
    return list(Vehicle.objects.all())


def create_vehicle(brand: Any, plate_number: Any, max_payload_kg: Any) -> Vehicle:
    """
    Register a vehicle.

    Raises:
        VehicleFieldError: brand / plate number empty, payload missing or negative
        DuplicatePlateNumber: a vehicle with this plate number already exists
        PersistenceError: the database rejected the write for another reason
    """
    brand = _clean_text(brand)
    plate_number = _clean_text(plate_number)
    if not brand:
        raise VehicleFieldError("Vehicle brand is required.", field="brand")
    if not plate_number:
        raise VehicleFieldError("Vehicle plate number is required.", field="plateNumber")
    payload = _clean_payload(max_payload_kg)

    if Vehicle.objects.filter(plate_number=plate_number).exists():
        raise DuplicatePlateNumber(plate_number)

    try:
        with transaction.atomic():
            vehicle = Vehicle.objects.create(
                brand=brand,
                plate_number=plate_number,
                max_payload_kg=payload,
            )
    except IntegrityError:
        # lost a race against another registration of the same plate
        raise DuplicatePlateNumber(plate_number)
    except DatabaseError as e:
        logger.exception("Failed to register vehicle %s", plate_number)
        raise PersistenceError(f"Could not register vehicle: {e}")

    logger.info("Registered vehicle %s (max payload %s kg)", vehicle.label, payload)
    return vehicle


def get_vehicle_by_plate(plate_number: Any) -> Optional[Vehicle]:
    plate_number = _clean_text(plate_number)
    if not plate_number:
        return None
    return Vehicle.objects.filter(plate_number=plate_number).first()
