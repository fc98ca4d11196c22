"""
Error taxonomy shared by the fleet, deliveries and pricing apps.

Field validation errors carry the offending field and a stable code so the
API can render them next to the right form input. Conflict, not-found and
collaborator errors are separate branches so callers can tell them apart
without string matching.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional


class LogiTrackError(Exception):
    """Base exception for all application errors"""

    code = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def as_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code}


# ---------- field validation ----------
class FieldValidationError(LogiTrackError):
    """Raised when a single input field fails a business rule"""

    code = "invalid"
    field: Optional[str] = None

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        if field is not None:
            self.field = field

    def as_dict(self) -> Dict[str, Any]:
        data = super().as_dict()
        data["field"] = self.field
        return data


class InvalidDateFormat(FieldValidationError):
    code = "invalid_date_format"
    field = "date"

    def __init__(self, value: Any = None):
        super().__init__("Date must be in YYYY-MM-DD format")
        self.value = value


class RequiredFieldMissing(FieldValidationError):
    code = "required"

    def __init__(self, field: str):
        super().__init__(f"{field} is required.", field=field)


class InvalidWeight(FieldValidationError):
    code = "invalid_weight"
    field = "weightKg"

    def __init__(self, message: str = "Weight must be a positive number."):
        super().__init__(message)


class InvalidPrice(FieldValidationError):
    code = "invalid_price"
    field = "pricePerKg"

    def __init__(self, message: str = "Price per kg must be a positive number."):
        super().__init__(message)


class InvalidTotal(FieldValidationError):
    code = "invalid_total"
    field = "totalAriary"

    def __init__(self):
        super().__init__("Total must be greater than 0 Ar; increase the weight or the price per kg.")


class VehicleNotFound(FieldValidationError):
    code = "vehicle_not_found"
    field = "vehicleId"

    def __init__(self, vehicle_id: Any = None):
        super().__init__("Invalid vehicle selected.")
        self.vehicle_id = vehicle_id


class PayloadExceeded(FieldValidationError):
    code = "payload_exceeded"
    field = "weightKg"

    def __init__(self, weight_kg: Decimal, max_payload_kg: Decimal, vehicle_label: str):
        super().__init__(f"Max payload for {vehicle_label} is {max_payload_kg}kg.")
        self.weight_kg = weight_kg
        self.max_payload_kg = max_payload_kg
        self.vehicle_label = vehicle_label

    def as_dict(self) -> Dict[str, Any]:
        data = super().as_dict()
        data.update({
            "weightKg": float(self.weight_kg),
            "maxPayloadKg": float(self.max_payload_kg),
            "vehicle": self.vehicle_label,
        })
        return data


class VehicleFieldError(FieldValidationError):
    """Raised when a vehicle registration payload is invalid"""
    code = "invalid_vehicle"


# ---------- conflicts ----------
class ConflictError(LogiTrackError):
    code = "conflict"


class DuplicatePlateNumber(ConflictError):
    code = "duplicate_plate_number"

    def __init__(self, plate_number: str):
        super().__init__("Vehicle with this plate number already exists.")
        self.plate_number = plate_number


# ---------- not found ----------
class NotFoundError(LogiTrackError):
    code = "not_found"


class DeliveryNotFound(NotFoundError):
    def __init__(self, delivery_id: Any):
        super().__init__("Delivery not found")
        self.delivery_id = delivery_id


class UnknownVehicle(NotFoundError):
    def __init__(self, vehicle_id: Any):
        super().__init__("Vehicle not found")
        self.vehicle_id = vehicle_id


# ---------- collaborators ----------
class CollaboratorError(LogiTrackError):
    """Raised when an external collaborator (database, AI provider) fails"""
    code = "collaborator_error"


class AIServiceError(CollaboratorError):
    code = "ai_service_error"


class PersistenceError(CollaboratorError):
    code = "persistence_error"
