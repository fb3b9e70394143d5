from django.contrib import admin

from hotel.models import Hotel


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "owner",
        "total_rooms",
        "max_guests",
        "base_price_per_night",
        "is_approved",
        "is_suspended",
    )
    list_filter = ("is_approved", "is_suspended")
    search_fields = ("name", "owner__username", "owner__email")
