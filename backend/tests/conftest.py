# tests/conftest.py
"""
Pytest fixtures for catalog access tests.

Users created here are NOT provisioned: post_save provisioning runs on
commit, and the test transaction never commits. Every grant a test relies
on is therefore issued explicitly.

Catalog layout used throughout:

    brand_a: product_a1, product_a2
    brand_b: product_b1
    (none):  product_loose

Each product has one expense and one item; ``orphan_expense`` and
``orphan_item`` point at a ProductID that was never imported.
"""

import logging
from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from accounts import grants
from accounts.authz import ActorContext
from accounts.models import Company, TargetKind
from catalog.models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem
from ops.logging_config import APP_LOGGERS


User = get_user_model()


@pytest.fixture(autouse=True)
def _capture_app_logs(caplog):
    """App loggers do not propagate in LOGGING; give them caplog's handler directly."""
    app_loggers = [logging.getLogger(name) for name in APP_LOGGERS]
    for app_logger in app_loggers:
        app_logger.addHandler(caplog.handler)
    yield
    for app_logger in app_loggers:
        app_logger.removeHandler(caplog.handler)


# =============================================================================
# Users & Actors
# =============================================================================

@pytest.fixture
def make_user(db):
    """Factory for unprovisioned users."""
    counter = {"n": 0}

    def _make(name=None, **extra):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = extra.pop("email", f"user{counter['n']}@example.com")
        return User.objects.create_user(email=email, name=name, password="testpass123", **extra)

    return _make


@pytest.fixture
def user(make_user):
    return make_user("Alice")


@pytest.fixture
def other_user(make_user):
    return make_user("Bob")


@pytest.fixture
def actor_for():
    """Fresh grant snapshot for a user, the way a request would build it."""
    return ActorContext.for_user


@pytest.fixture
def company(db):
    return Company.objects.create(name="Acme")


@pytest.fixture
def company_user(make_user, company):
    u = make_user("Company Carol")
    grants.grant(u, TargetKind.COMPANY, company.pk)
    return u


@pytest.fixture
def brand_user(make_user, brand_a):
    u = make_user("Brand Bill")
    grants.grant(u, TargetKind.BRAND, brand_a.pk)
    return u


@pytest.fixture
def product_user(make_user, brand_a, product_b1):
    """Holds a brand grant AND a product grant: the product grant wins."""
    u = make_user("Product Pat")
    grants.grant(u, TargetKind.BRAND, brand_a.pk)
    grants.grant(u, TargetKind.PRODUCT, product_b1.pk)
    return u


@pytest.fixture
def nobody(make_user):
    return make_user("Zero Zed")


# =============================================================================
# Catalog
# =============================================================================

@pytest.fixture
def brand_a(db):
    return Brand.objects.create(name="Brand A", external_id=10)


@pytest.fixture
def brand_b(db):
    return Brand.objects.create(name="Brand B", external_id=20)


@pytest.fixture
def gender(db):
    return Gender.objects.create(name="Unisex")


@pytest.fixture
def category(db):
    return Category.objects.create(name="Shoes")


@pytest.fixture
def expense_type(db):
    return ExpenseType.objects.create(name="Advertising", external_id=7)


@pytest.fixture
def product_a1(brand_a, gender, category):
    return Product.objects.create(
        name="Runner", external_id=1001, brand=brand_a, gender=gender, main_category=category
    )


@pytest.fixture
def product_a2(brand_a):
    return Product.objects.create(name="Walker", external_id=1002, brand=brand_a)


@pytest.fixture
def product_b1(brand_b):
    return Product.objects.create(name="Hiker", external_id=2001, brand=brand_b)


@pytest.fixture
def product_loose(db):
    return Product.objects.create(name="Loose", external_id=3001)


@pytest.fixture
def products(product_a1, product_a2, product_b1, product_loose):
    return [product_a1, product_a2, product_b1, product_loose]


def _expense(product_id, expense_type, day=date(2024, 3, 1), amount="10.00"):
    return Expense.objects.create(
        product_id=product_id,
        expense_type_id=expense_type.external_id,
        expense_date=day,
        amount=Decimal(amount),
    )


@pytest.fixture
def expenses(products, expense_type):
    """One expense per product, keyed by product slug."""
    return {p.slug: _expense(p.external_id, expense_type) for p in products}


@pytest.fixture
def items(products):
    """One item per product, keyed by product slug."""
    return {
        p.slug: ProductItem.objects.create(name=f"{p.name} item", sku=f"SKU-{p.external_id}", product_id=p.external_id)
        for p in products
    }


@pytest.fixture
def orphan_expense(expense_type):
    return _expense(9999, expense_type)


@pytest.fixture
def orphan_item(db):
    return ProductItem.objects.create(name="Orphan item", product_id=9999)


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    """APIClient authenticated as the given user."""

    def _client(u):
        api_client.force_authenticate(user=u)
        return api_client

    return _client
