import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


ACTOR_CHOICES = [
    ("guest", "Guest"),
    ("host", "Host"),
    ("payment", "Payment"),
    ("system", "System"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("coupon", "0001_initial"),
        ("hotel", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                (
                    "guests",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("confirmed", "Confirmed"),
                            ("checked-in", "Checked In"),
                            ("checked-out", "Checked Out"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("nights", models.PositiveIntegerField()),
                (
                    "base_price_per_night",
                    models.DecimalField(decimal_places=2, max_digits=10),
                ),
                (
                    "base_price_total",
                    models.DecimalField(decimal_places=2, max_digits=12),
                ),
                ("cleaning_fee", models.DecimalField(decimal_places=2, max_digits=10)),
                ("service_fee", models.DecimalField(decimal_places=2, max_digits=10)),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "coupon_discount_percentage",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                (
                    "discounts",
                    models.DecimalField(decimal_places=2, default=0, max_digits=12),
                ),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "applied_coupon_code",
                    models.CharField(blank=True, max_length=20, null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "confirmed_by",
                    models.CharField(blank=True, choices=ACTOR_CHOICES, max_length=20),
                ),
                ("checked_in_at", models.DateTimeField(blank=True, null=True)),
                ("checked_out_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                (
                    "cancelled_by",
                    models.CharField(blank=True, choices=ACTOR_CHOICES, max_length=20),
                ),
                ("cancellation_reason", models.TextField(blank=True)),
                (
                    "refund_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True
                    ),
                ),
                (
                    "coupon",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to="coupon.coupon",
                    ),
                ),
                (
                    "guest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "hotel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="hotel.hotel",
                    ),
                ),
            ],
            options={
                "ordering": ("-created_at", "-id"),
                "indexes": [
                    models.Index(
                        fields=["hotel", "status", "check_in_date"],
                        name="booking_hotel_status_idx",
                    ),
                    models.Index(
                        fields=["guest", "status"], name="booking_guest_status_idx"
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("check_out_date__gt", models.F("check_in_date"))
                        ),
                        name="check_out_after_check_in",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("guests__gte", 1)),
                        name="booking_guests_positive",
                    ),
                ],
            },
        ),
    ]
