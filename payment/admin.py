from django.contrib import admin

from payment.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "status", "money_to_pay", "provider_ref", "created_at")
    list_filter = ("status",)
