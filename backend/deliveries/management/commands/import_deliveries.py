from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from core.errors import FieldValidationError, PersistenceError
from deliveries.services.computation import validate_and_prepare
from deliveries.services.store import save_delivery
from fleet.services.registry import get_vehicle_by_id, get_vehicle_by_plate


class Command(BaseCommand):
    help = (
        "Import deliveries from the legacy local JSON file (data/deliveries.json). "
        "Every row goes through the delivery validation engine; totals are recomputed."
    )

    def add_arguments(self, parser):
        parser.add_argument("--path", type=str, default="data/deliveries.json", help="Legacy deliveries JSON file")
        parser.add_argument("--vehicle", type=str, help="Vehicle id or plate number for rows without a vehicleId")
        parser.add_argument("--dry-run", action="store_true", help="Validate only, do not save")

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")

        text = path.read_text(encoding="utf-8")
        if not text.strip():
            rows = []
        else:
            try:
                rows = json.loads(text)
            except json.JSONDecodeError as e:
                raise CommandError(f"Invalid JSON in {path}: {e}")
        if not isinstance(rows, list):
            raise CommandError(f"Expected a JSON array of deliveries in {path}")

        default_vehicle = None
        if options.get("vehicle"):
            default_vehicle = get_vehicle_by_id(options["vehicle"]) or get_vehicle_by_plate(options["vehicle"])
            if default_vehicle is None:
                raise CommandError(f"Unknown vehicle '{options['vehicle']}'")

        try:
            # all or nothing: a failed write rolls back the rows saved before it
            with transaction.atomic():
                imported, skipped = self._import_rows(rows, default_vehicle, options["dry_run"])
        except PersistenceError as e:
            raise CommandError(f"Import aborted, nothing was saved: {e.message}")

        verb = "Validated" if options["dry_run"] else "Imported"
        self.stdout.write(self.style.SUCCESS(f"{verb} {imported} deliveries, skipped {skipped}."))

    def _import_rows(self, rows, default_vehicle, dry_run):
        imported = skipped = 0
        for idx, row in enumerate(rows, start=1):
            if not isinstance(row, dict):
                self.stdout.write(self.style.WARNING(f"Row {idx}: not an object, skipped"))
                skipped += 1
                continue
            vehicle = get_vehicle_by_id(row.get("vehicleId")) if row.get("vehicleId") else default_vehicle
            try:
                prepared = validate_and_prepare(row, vehicle)
            except FieldValidationError as e:
                self.stdout.write(self.style.WARNING(f"Row {idx}: {e.field}: {e.message} (skipped)"))
                skipped += 1
                continue
            if not dry_run:
                save_delivery(prepared)
            imported += 1
        return imported, skipped
