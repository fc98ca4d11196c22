from __future__ import annotations

import logging
import uuid
from typing import Any, List

from django.db import DatabaseError, transaction

from core.errors import DeliveryNotFound, PersistenceError

from ..dataclasses import PreparedDelivery
from ..models import Delivery

logger = logging.getLogger(__name__)


def save_delivery(prepared: PreparedDelivery) -> Delivery:
    """Persist a validated delivery; the database assigns id and timestamps."""
    try:
        with transaction.atomic():
            delivery = Delivery.objects.create(
                date=prepared.date,
                client=prepared.client,
                departure_location=prepared.departure_location,
                destination=prepared.destination,
                goods=prepared.goods,
                weight_kg=prepared.weight_kg,
                price_per_kg=prepared.price_per_kg,
                total_ariary=prepared.total_ariary,
                vehicle_id=prepared.vehicle_id,
            )
    except DatabaseError as e:
        logger.exception("Failed to save delivery for %s", prepared.client)
        raise PersistenceError(f"Failed to log delivery: {e}")
    logger.info("Logged delivery %s (%s kg, total %s Ar)", delivery.id, delivery.weight_kg, delivery.total_ariary)
    return delivery


def list_deliveries() -> List[Delivery]:
    """Every delivery in creation order."""
    try:
        return list(Delivery.objects.order_by("created_at"))
    except DatabaseError as e:
        logger.exception("Failed to read deliveries")
        raise PersistenceError(f"Failed to read deliveries: {e}")


def get_delivery(delivery_id: Any) -> Delivery:
    try:
        pk = delivery_id if isinstance(delivery_id, uuid.UUID) else uuid.UUID(str(delivery_id).strip())
    except ValueError:
        raise DeliveryNotFound(delivery_id)
    delivery = Delivery.objects.filter(pk=pk).first()
    if delivery is None:
        raise DeliveryNotFound(delivery_id)
    return delivery


def delete_delivery(delivery_id: Any) -> None:
    """Hard delete. A missing id is an error, never a silent success."""
    delivery = get_delivery(delivery_id)
    try:
        delivery.delete()
    except DatabaseError as e:
        logger.exception("Failed to delete delivery %s", delivery_id)
        raise PersistenceError(f"Failed to delete delivery: {e}")
    logger.info("Deleted delivery %s", delivery_id)
