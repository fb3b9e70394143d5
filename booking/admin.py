from django.contrib import admin

from booking.models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "hotel",
        "guest",
        "check_in_date",
        "check_out_date",
        "guests",
        "status",
        "total_price",
    )
    list_filter = ("status",)
    search_fields = ("hotel__name", "guest__username", "guest__email")
    readonly_fields = Booking.SNAPSHOT_FIELDS + ("applied_coupon_code", "status")
