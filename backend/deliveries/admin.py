from django.contrib import admin

from .models import Delivery


@admin.register(Delivery)
class DeliveryAdmin(admin.ModelAdmin):
    list_display = ("date", "client", "departure_location", "destination", "goods", "weight_kg", "price_per_kg", "total_ariary", "vehicle")
    search_fields = ("client", "departure_location", "destination", "goods")
    list_filter = ("date", "vehicle")
    date_hierarchy = "date"
    # totals are derived by the computation engine, never typed in
    readonly_fields = ("total_ariary", "created_at", "updated_at")

    def has_change_permission(self, request, obj=None):
        return False

    def has_add_permission(self, request):
        return False
