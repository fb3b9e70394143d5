from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsHotelOwnerOrReadOnly(BasePermission):
    """Allow read-only access for everyone, write access only for the hotel owner."""

    message = "Only the host of this hotel can do this."
    code = "unauthorized"

    def has_object_permission(self, request, view, obj):
        """Return True for SAFE methods, otherwise require the owner."""
        if request.method in SAFE_METHODS:
            return True
        return obj.owner_id == request.user.pk
