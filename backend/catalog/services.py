"""
Catalog listing services.

Translate query parameters into queryset filters and resolve the records
that nested routes hang off. The caller has already applied the actor's
scope; nothing here widens it.
"""

import datetime

from rest_framework.exceptions import NotFound, ValidationError

from catalog.models import Brand, Category, ExpenseType, Gender, Product

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


# =============================================================================
# Lookups
# =============================================================================

def find_by_slug(model, slug):
    """Live record by slug; duplicate slugs resolve to the oldest row."""
    obj = model.objects.filter(slug=slug).order_by("pk").first()
    if obj is None:
        raise NotFound(f"{model._meta.verbose_name} '{slug}' not found.")
    return obj


def find_brand(slug) -> Brand:
    return find_by_slug(Brand, slug)


def find_product(slug) -> Product:
    return find_by_slug(Product, slug)


# =============================================================================
# Query parameter parsing
# =============================================================================

def parse_bool(params, name):
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValidationError({name: f"Expected a boolean, got '{raw}'."})


def parse_date(params, name):
    raw = params.get(name)
    if not raw:
        return None
    try:
        return datetime.date.fromisoformat(raw)
    except ValueError:
        raise ValidationError({name: "Expected a date in YYYY-MM-DD format."}) from None


def _related_filters(queryset, params):
    if params.get("brand"):
        queryset = queryset.for_brand(find_brand(params["brand"]))
    if params.get("category"):
        queryset = queryset.for_category(find_by_slug(Category, params["category"]))
    if params.get("gender"):
        queryset = queryset.for_gender(find_by_slug(Gender, params["gender"]))
    return queryset


def filter_products(queryset, params):
    queryset = _related_filters(queryset, params)
    visible = parse_bool(params, "is_visible")
    if visible is not None:
        queryset = queryset.filter(is_visible=visible)
    return queryset


def filter_product_items(queryset, params):
    queryset = _related_filters(queryset, params)
    if params.get("product"):
        queryset = queryset.for_product(find_product(params["product"]))
    return queryset.with_flags(
        active=parse_bool(params, "active"),
        up_sell=parse_bool(params, "up_sell"),
        extra_product=parse_bool(params, "extra_product"),
        flagged_deleted=parse_bool(params, "flagged_deleted"),
    )


def filter_expenses(queryset, params):
    queryset = _related_filters(queryset, params)
    if params.get("product"):
        queryset = queryset.for_product(find_product(params["product"]))
    if params.get("expense_type"):
        queryset = queryset.for_expense_type(find_by_slug(ExpenseType, params["expense_type"]))
    day = parse_date(params, "date")
    if day is not None:
        return queryset.on_date(day)
    start = parse_date(params, "date_from")
    end = parse_date(params, "date_to")
    if start and end and start > end:
        raise ValidationError({"date_to": "Must not be before date_from."})
    return queryset.between_dates(start, end)

