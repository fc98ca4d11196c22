from django.contrib import admin

from .models import Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("plate_number", "brand", "max_payload_kg", "created_at")
    search_fields = ("plate_number", "brand")
    readonly_fields = ("created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        # registered vehicles are immutable
        if obj:
            return [f.name for f in obj._meta.fields]
        return super().get_readonly_fields(request, obj)
