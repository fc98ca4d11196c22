from django.core.management.base import BaseCommand

from core.errors import DuplicatePlateNumber
from fleet.services.registry import create_vehicle


class Command(BaseCommand):
    help = "Seed a few demo vehicles for local development"

    def handle(self, *args, **options):
        demo_fleet = [
            {"brand": "Toyota", "plate_number": "1234 TBA", "max_payload_kg": "1000"},
            {"brand": "Isuzu", "plate_number": "5678 TBB", "max_payload_kg": "3500"},
            {"brand": "Mitsubishi Fuso", "plate_number": "9012 TBC", "max_payload_kg": "8000"},
        ]

        created = 0
        for data in demo_fleet:
            try:
                vehicle = create_vehicle(**data)
            except DuplicatePlateNumber:
                # registered vehicles are immutable; leave them as they are
                self.stdout.write(self.style.NOTICE(f"Exists: {data['plate_number']}"))
                continue
            created += 1
            self.stdout.write(self.style.SUCCESS(f"Registered vehicle: {vehicle.label}"))

        self.stdout.write(self.style.SUCCESS(f"Fleet ready (created {created})."))
