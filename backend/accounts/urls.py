# accounts/urls.py
"""
URL configuration for accounts API.

Endpoints (under /api/v1/):
- /auth/me/ - Current user and grant summary
- /users/ - User management (addressed by username), activation, statistics
- /companies/ - Companies (addressed by slug), statistics
"""

from django.urls import path

from .views import (
    MeView,
    UserListCreateView,
    UserDetailView,
    UserRestoreView,
    UserForceDeleteView,
    UserActivateView,
    UserDeactivateView,
    UserStatisticsView,
    CompanyListCreateView,
    CompanyDetailView,
    CompanyRestoreView,
    CompanyForceDeleteView,
    CompanyStatisticsView,
)

app_name = "accounts"

urlpatterns = [
    # ==========================================================================
    # Authentication
    # ==========================================================================
    path("auth/me/", MeView.as_view(), name="me"),

    # ==========================================================================
    # Users
    # ==========================================================================
    path("users/", UserListCreateView.as_view(), name="user-list"),
    path("users/statistics/", UserStatisticsView.as_view(), name="user-statistics"),
    path("users/<int:pk>/restore/", UserRestoreView.as_view(), name="user-restore"),
    path("users/<int:pk>/force/", UserForceDeleteView.as_view(), name="user-force"),
    path("users/<str:key>/activate/", UserActivateView.as_view(), name="user-activate"),
    path("users/<str:key>/deactivate/", UserDeactivateView.as_view(), name="user-deactivate"),
    path("users/<str:key>/", UserDetailView.as_view(), name="user-detail"),

    # ==========================================================================
    # Companies
    # ==========================================================================
    path("companies/", CompanyListCreateView.as_view(), name="company-list"),
    path("companies/statistics/", CompanyStatisticsView.as_view(), name="company-statistics"),
    path("companies/<int:pk>/restore/", CompanyRestoreView.as_view(), name="company-restore"),
    path("companies/<int:pk>/force/", CompanyForceDeleteView.as_view(), name="company-force"),
    path("companies/<str:key>/", CompanyDetailView.as_view(), name="company-detail"),
]
