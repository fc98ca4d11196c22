from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from core.formatting import format_aggregates
from deliveries.dataclasses import ReportFilters
from deliveries.services.computation import parse_delivery_date
from deliveries.services.reporting import aggregate, filter_deliveries
from deliveries.services.store import list_deliveries


class Command(BaseCommand):
    help = "Print revenue, weight and average price per kg for the deliveries matching the filters."

    def add_arguments(self, parser):
        parser.add_argument("--start-date", type=str, help="Inclusive start date, YYYY-MM-DD")
        parser.add_argument("--end-date", type=str, help="Inclusive end date, YYYY-MM-DD")
        parser.add_argument("--search", type=str, default="", help="Client / route / goods substring")

    def handle(self, *args, **options):
        def date_option(name: str):
            raw = options.get(name)
            if not raw:
                return None
            value = parse_delivery_date(raw)
            if value is None:
                raise CommandError(f"--{name.replace('_', '-')} must be in YYYY-MM-DD format")
            return value

        filters = ReportFilters(
            start_date=date_option("start_date"),
            end_date=date_option("end_date"),
            search_term=options.get("search") or "",
        )
        matched = filter_deliveries(list_deliveries(), filters)
        totals = aggregate(matched)
        formatted = format_aggregates(totals.total_revenue, totals.total_weight, totals.average_price_per_kg)

        self.stdout.write(f"Deliveries:        {len(matched)}")
        self.stdout.write(f"Total revenue:     {formatted['totalRevenue']}")
        self.stdout.write(f"Total weight:      {formatted['totalWeight']}")
        self.stdout.write(f"Avg price per kg:  {formatted['averagePricePerKg']}")
