from django.contrib import admin

from coupon.models import Coupon


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "hotel",
        "discount_percentage",
        "valid_from",
        "valid_to",
        "current_uses",
        "max_uses",
    )
    list_filter = ("hotel",)
    search_fields = ("code", "hotel__name")
    readonly_fields = ("current_uses",)
