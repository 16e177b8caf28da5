# accounts/views.py
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authz import resolve_actor
from accounts.record_views import (
    RecordActivationView,
    RecordDetailView,
    RecordForceDeleteView,
    RecordListCreateView,
    RecordRestoreView,
    RecordStatisticsView,
)

from .models import Company, User
from .serializers import CompanySerializer, MeSerializer, UserSerializer


class MeView(APIView):
    """GET /api/v1/auth/me/ -> current user and a summary of live grants."""

    def get(self, request):
        actor = resolve_actor(request)
        return Response(MeSerializer.from_actor(actor).data)


# =============================================================================
# Users
# =============================================================================

class UserMixin:
    model = User
    serializer_class = UserSerializer
    lookup_field = "username"

    def get_queryset(self):
        # The user managers do not hide trashed rows (authentication needs them).
        return User.objects.alive()


class UserListCreateView(UserMixin, RecordListCreateView):
    pass


class UserDetailView(UserMixin, RecordDetailView):
    pass


class UserRestoreView(UserMixin, RecordRestoreView):
    def get_queryset(self):
        return User.all_objects.all()


class UserForceDeleteView(UserMixin, RecordForceDeleteView):
    def get_queryset(self):
        return User.all_objects.all()


class UserActivateView(UserMixin, RecordActivationView):
    """POST /api/v1/users/<key>/activate/"""

    active = True


class UserDeactivateView(UserMixin, RecordActivationView):
    """POST /api/v1/users/<key>/deactivate/ -> user can no longer sign in."""

    active = False


class UserStatisticsView(RecordStatisticsView):
    model = User


# =============================================================================
# Companies
# =============================================================================

class CompanyMixin:
    model = Company
    serializer_class = CompanySerializer


class CompanyListCreateView(CompanyMixin, RecordListCreateView):
    pass


class CompanyDetailView(CompanyMixin, RecordDetailView):
    pass


class CompanyRestoreView(CompanyMixin, RecordRestoreView):
    pass


class CompanyForceDeleteView(CompanyMixin, RecordForceDeleteView):
    pass


class CompanyStatisticsView(RecordStatisticsView):
    model = Company
