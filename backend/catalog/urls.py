# catalog/urls.py
"""
URL configuration for the catalog API.

Endpoints (under /api/v1/):
- /brands/, /products/, /product-items/, /expenses/ - access-scoped catalog
- /categories/, /genders/, /expense-types/ - open reference data
- /<resource>/<pk>/restore/ and /<resource>/<pk>/force/ - trash handling
- /<resource>/statistics/ - scoped counts
- /brands|categories|genders/<slug>/products/ and /.../<slug>/expenses/ - nested listings
"""

from django.urls import path

from . import views

app_name = "catalog"


def resource_routes(prefix, name, list_view, detail_view, restore_view, force_view):
    return [
        path(f"{prefix}/", list_view.as_view(), name=f"{name}-list"),
        path(f"{prefix}/<int:pk>/restore/", restore_view.as_view(), name=f"{name}-restore"),
        path(f"{prefix}/<int:pk>/force/", force_view.as_view(), name=f"{name}-force"),
        path(f"{prefix}/<str:key>/", detail_view.as_view(), name=f"{name}-detail"),
    ]


urlpatterns = [
    # ==========================================================================
    # Statistics and nested listings (before the <key> detail routes)
    # ==========================================================================
    *[
        path(f"{prefix}/statistics/", view.as_view(), name=f"{name}-statistics")
        for prefix, name, view in (
            ("brands", "brand", views.BrandStatisticsView),
            ("products", "product", views.ProductStatisticsView),
            ("product-items", "product-item", views.ProductItemStatisticsView),
            ("expenses", "expense", views.ExpenseStatisticsView),
            ("categories", "category", views.CategoryStatisticsView),
            ("genders", "gender", views.GenderStatisticsView),
            ("expense-types", "expense-type", views.ExpenseTypeStatisticsView),
        )
    ],
    path("brands/<str:slug>/products/", views.BrandProductListView.as_view(), name="brand-products"),
    path("brands/<str:slug>/expenses/", views.BrandExpenseListView.as_view(), name="brand-expenses"),
    path("products/<str:slug>/expenses/", views.ProductExpenseListView.as_view(), name="product-expenses"),
    path("categories/<str:slug>/products/", views.CategoryProductListView.as_view(), name="category-products"),
    path("categories/<str:slug>/expenses/", views.CategoryExpenseListView.as_view(), name="category-expenses"),
    path("genders/<str:slug>/products/", views.GenderProductListView.as_view(), name="gender-products"),
    path("genders/<str:slug>/expenses/", views.GenderExpenseListView.as_view(), name="gender-expenses"),
    path(
        "expense-types/<str:slug>/expenses/",
        views.ExpenseTypeExpenseListView.as_view(),
        name="expense-type-expenses",
    ),

    # ==========================================================================
    # Access-scoped catalog
    # ==========================================================================
    *resource_routes(
        "brands", "brand",
        views.BrandListCreateView, views.BrandDetailView,
        views.BrandRestoreView, views.BrandForceDeleteView,
    ),
    *resource_routes(
        "products", "product",
        views.ProductListCreateView, views.ProductDetailView,
        views.ProductRestoreView, views.ProductForceDeleteView,
    ),
    *resource_routes(
        "product-items", "product-item",
        views.ProductItemListCreateView, views.ProductItemDetailView,
        views.ProductItemRestoreView, views.ProductItemForceDeleteView,
    ),
    *resource_routes(
        "expenses", "expense",
        views.ExpenseListCreateView, views.ExpenseDetailView,
        views.ExpenseRestoreView, views.ExpenseForceDeleteView,
    ),

    # ==========================================================================
    # Reference data
    # ==========================================================================
    *resource_routes(
        "categories", "category",
        views.CategoryListCreateView, views.CategoryDetailView,
        views.CategoryRestoreView, views.CategoryForceDeleteView,
    ),
    *resource_routes(
        "genders", "gender",
        views.GenderListCreateView, views.GenderDetailView,
        views.GenderRestoreView, views.GenderForceDeleteView,
    ),
    *resource_routes(
        "expense-types", "expense-type",
        views.ExpenseTypeListCreateView, views.ExpenseTypeDetailView,
        views.ExpenseTypeRestoreView, views.ExpenseTypeForceDeleteView,
    ),
]
