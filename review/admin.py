from django.contrib import admin

from review.models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "hotel", "guest", "booking", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("hotel__name", "guest__username", "comment")
