from django.urls import path

from payment.views import PaymentConfirmView, PaymentListView

urlpatterns = [
    path("payments/", PaymentListView.as_view(), name="payment-list"),
    path("payments/confirm/", PaymentConfirmView.as_view(), name="payment-confirm"),
]
