from rest_framework.permissions import BasePermission


class IsActiveActor(BasePermission):
    """
    Reject authenticated users that were deactivated or soft-deleted.

    Token verification alone cannot tell: the token stays valid until it
    expires, so the user row is checked on every request.
    """

    message = "This account has been deactivated."
    code = "account_deactivated"

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            # IsAuthenticated answers with 401.
            return True
        if not user.is_active:
            return False
        return getattr(user, "deleted_at", None) is None
