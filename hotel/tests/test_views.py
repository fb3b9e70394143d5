from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from booking.models import Booking
from booking.tests.helpers import future, make_booking, make_hotel, make_user
from hotel.models import Hotel

HOTELS_URL = "/api/hotels/"


class HotelAPITestCase(APITestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host, total_rooms=2)
        self.client.force_authenticate(user=self.host)

    def test_create_sets_owner_and_waits_for_approval(self):
        response = self.client.post(
            HOTELS_URL,
            {
                "name": "Hill Lodge",
                "max_guests": 3,
                "total_rooms": 4,
                "base_price_per_night": "80.00",
                "is_approved": True,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        hotel = Hotel.objects.get(pk=response.data["id"])
        self.assertEqual(hotel.owner, self.host)
        self.assertFalse(hotel.is_approved)

    def test_list_hides_unapproved_hotels_of_others(self):
        hidden = make_hotel(self.host, name="Hidden", is_approved=False)
        suspended = make_hotel(self.host, name="Suspended", is_suspended=True)

        self.client.force_authenticate(user=self.guest)
        response = self.client.get(HOTELS_URL)
        ids = [item["id"] for item in response.data]

        self.assertIn(self.hotel.id, ids)
        self.assertNotIn(hidden.id, ids)
        self.assertNotIn(suspended.id, ids)

        self.client.force_authenticate(user=self.host)
        ids = [item["id"] for item in self.client.get(HOTELS_URL).data]
        self.assertIn(hidden.id, ids)

    def test_only_owner_updates(self):
        self.client.force_authenticate(user=self.guest)

        response = self.client.patch(
            f"{HOTELS_URL}{self.hotel.id}/", {"name": "Mine now"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "unauthorized")

    def test_hotels_cannot_be_deleted(self):
        response = self.client.delete(f"{HOTELS_URL}{self.hotel.id}/")
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_pricing_is_locked_by_active_bookings(self):
        make_booking(self.hotel, self.guest, future(5), future(7))

        response = self.client.patch(
            f"{HOTELS_URL}{self.hotel.id}/",
            {"base_price_per_night": "150.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("base_price_per_night", response.data["errors"])
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.base_price_per_night, Decimal("100.00"))

    def test_pricing_changes_without_active_bookings(self):
        make_booking(
            self.hotel, self.guest, future(5), future(7), Booking.BookingStatus.CANCELLED
        )

        response = self.client.patch(
            f"{HOTELS_URL}{self.hotel.id}/",
            {"base_price_per_night": "150.00", "name": "Renamed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.base_price_per_night, Decimal("150.00"))

    def test_non_pricing_update_with_active_bookings(self):
        make_booking(self.hotel, self.guest, future(5), future(7))

        response = self.client.patch(
            f"{HOTELS_URL}{self.hotel.id}/",
            {"description": "Now with breakfast", "base_price_per_night": "100.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class HotelBookingsTests(APITestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host)
        self.booking = make_booking(self.hotel, self.guest, future(5), future(7))

    def test_host_lists_hotel_bookings(self):
        self.client.force_authenticate(user=self.host)

        response = self.client.get(f"{HOTELS_URL}{self.hotel.id}/bookings/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [self.booking.id])

    def test_guest_cannot_list_hotel_bookings(self):
        self.client.force_authenticate(user=self.guest)

        response = self.client.get(f"{HOTELS_URL}{self.hotel.id}/bookings/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class HotelCalendarTests(APITestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host, total_rooms=2)
        self.client.force_authenticate(user=self.guest)
        self.url = f"{HOTELS_URL}{self.hotel.id}/calendar/"

    def test_rooms_left_per_night(self):
        make_booking(self.hotel, self.guest, future(1), future(3))
        make_booking(self.hotel, self.guest, future(2), future(4), Booking.BookingStatus.CONFIRMED)
        make_booking(self.hotel, self.guest, future(1), future(5), Booking.BookingStatus.CANCELLED)

        response = self.client.get(
            self.url,
            {"date_from": future(1).isoformat(), "date_to": future(4).isoformat()},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([day["rooms_left"] for day in response.data], [1, 0, 1, 2])
        self.assertEqual(
            [day["available"] for day in response.data], [True, False, True, True]
        )

    def test_missing_dates(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "date_from and date_to are required")

    def test_inverted_dates(self):
        response = self.client.get(
            self.url,
            {"date_from": future(4).isoformat(), "date_to": future(1).isoformat()},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unapproved_hotel_is_not_found(self):
        hotel = make_hotel(self.host, is_approved=False)

        response = self.client.get(
            f"{HOTELS_URL}{hotel.id}/calendar/",
            {"date_from": future(1).isoformat(), "date_to": future(2).isoformat()},
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
