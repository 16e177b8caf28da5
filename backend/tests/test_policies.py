# tests/test_policies.py
"""
Tests for record policies.

Tests cover:
- Product / expense / item policies follow the resolver
- Brand policies (open viewing, gated changes, restore of trashed brands)
- Company policies (sentinel protection, restore through revoked grants)
- User policies (self rules)
- Open reference data and unknown models
"""

import pytest

from accounts import grants
from accounts.models import Company, Grant, TargetKind
from accounts.policies import policy_for
from catalog.models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem


# =============================================================================
# Products and product-owned records
# =============================================================================

@pytest.mark.django_db
class TestProductPolicy:

    def test_view_any_requires_some_grant(self, brand_user, nobody, actor_for):
        policy = policy_for(Product)

        assert policy.view_any(actor_for(brand_user))
        assert policy.create(actor_for(brand_user))
        assert not policy.view_any(actor_for(nobody))
        assert not policy.create(actor_for(nobody))

    def test_record_operations_follow_resolver(self, product_user, actor_for, product_a1, product_b1):
        policy = policy_for(Product)
        actor = actor_for(product_user)

        for check in (policy.view, policy.update, policy.delete, policy.force_delete):
            assert check(actor, product_b1)
            assert not check(actor, product_a1)

    def test_restore_via_revoked_product_grant(self, user, actor_for, product_b1):
        g = grants.grant(user, TargetKind.PRODUCT, product_b1.pk)
        grants.revoke(g.pk)
        product_b1.delete()
        trashed = Product.all_objects.get(pk=product_b1.pk)

        assert policy_for(Product).restore(actor_for(user), trashed)

    def test_restore_denied_without_any_grant_history(self, brand_user, actor_for, product_a1):
        """Brand-derived access does not extend to restoring products."""
        product_a1.delete()

        assert not policy_for(Product).restore(actor_for(brand_user), product_a1)

    def test_company_actor_restores_anything(self, company_user, actor_for, product_b1):
        product_b1.delete()

        assert policy_for(Product).restore(actor_for(company_user), product_b1)


@pytest.mark.django_db
class TestProductOwnedPolicies:

    @pytest.mark.parametrize("model", [Expense, ProductItem])
    def test_view_any_requires_some_grant(self, model, brand_user, nobody, actor_for):
        policy = policy_for(model)

        assert policy.view_any(actor_for(brand_user))
        assert not policy.view_any(actor_for(nobody))

    def test_expense_follows_owning_product(self, brand_user, actor_for, expenses):
        policy = policy_for(Expense)
        actor = actor_for(brand_user)

        assert policy.update(actor, expenses["runner"])
        assert not policy.update(actor, expenses["hiker"])

    def test_item_follows_owning_product(self, product_user, actor_for, items):
        policy = policy_for(ProductItem)
        actor = actor_for(product_user)

        assert policy.delete(actor, items["hiker"])
        assert not policy.delete(actor, items["runner"])

    def test_trashed_owning_product_denies(self, brand_user, actor_for, expenses, product_a1):
        product_a1.delete()

        assert not policy_for(Expense).view(actor_for(brand_user), expenses["runner"])

    def test_orphan_rows_need_company_access(
        self, company_user, brand_user, actor_for, orphan_expense, orphan_item
    ):
        assert policy_for(Expense).view(actor_for(company_user), orphan_expense)
        assert policy_for(ProductItem).force_delete(actor_for(company_user), orphan_item)
        assert not policy_for(Expense).view(actor_for(brand_user), orphan_expense)
        assert not policy_for(ProductItem).restore(actor_for(brand_user), orphan_item)


# =============================================================================
# Brands
# =============================================================================

@pytest.mark.django_db
class TestBrandPolicy:

    def test_everyone_can_view_and_create(self, nobody, actor_for, brand_a):
        policy = policy_for(Brand)
        actor = actor_for(nobody)

        assert policy.view_any(actor)
        assert policy.view(actor, brand_a)
        assert policy.create(actor)

    def test_changes_need_brand_grant(self, brand_user, actor_for, brand_a, brand_b):
        policy = policy_for(Brand)
        actor = actor_for(brand_user)

        assert policy.update(actor, brand_a)
        assert policy.delete(actor, brand_a)
        assert not policy.update(actor, brand_b)
        assert not policy.force_delete(actor, brand_b)

    def test_company_grant_covers_brand_changes(self, company_user, actor_for, brand_b):
        assert policy_for(Brand).delete(actor_for(company_user), brand_b)

    def test_restore_trashed_brand_with_grant(self, brand_user, actor_for, brand_a):
        brand_a.delete()
        trashed = Brand.all_objects.get(pk=brand_a.pk)

        assert trashed.is_trashed
        assert policy_for(Brand).restore(actor_for(brand_user), trashed)

    def test_restore_trashed_brand_without_grant(self, nobody, actor_for, brand_b):
        brand_b.delete()

        assert not policy_for(Brand).restore(actor_for(nobody), Brand.all_objects.get(pk=brand_b.pk))


# =============================================================================
# Companies
# =============================================================================

@pytest.mark.django_db
class TestCompanyPolicy:

    @pytest.fixture
    def sentinel(self, db):
        return Company.all_objects.create(name="Main", is_main=True)

    def test_sentinel_cannot_be_deleted_even_with_grant(self, user, actor_for, sentinel):
        grants.grant(user, TargetKind.COMPANY, sentinel.pk)
        policy = policy_for(Company)
        actor = actor_for(user)

        assert policy.update(actor, sentinel)
        assert not policy.delete(actor, sentinel)
        assert not policy.force_delete(actor, sentinel)

    def test_changes_need_grant_on_that_company(self, company_user, actor_for, company):
        other = Company.objects.create(name="Other")
        policy = policy_for(Company)
        actor = actor_for(company_user)

        assert policy.update(actor, company)
        assert policy.delete(actor, company)
        assert not policy.update(actor, other)
        assert not policy.delete(actor, other)

    def test_restore_uses_revoked_grants(self, company_user, actor_for, company):
        grants.revoke(Grant.objects.get(user=company_user).pk)
        company.delete()

        assert policy_for(Company).restore(actor_for(company_user), company)

    def test_everyone_can_view(self, nobody, actor_for, company):
        assert policy_for(Company).view(actor_for(nobody), company)


# =============================================================================
# Users and reference data
# =============================================================================

@pytest.mark.django_db
class TestUserPolicy:

    def test_only_self_update(self, user, other_user, actor_for):
        policy = policy_for(user)

        assert policy.update(actor_for(user), user)
        assert not policy.update(actor_for(user), other_user)

    def test_never_delete_self(self, user, other_user, actor_for):
        policy = policy_for(user)
        actor = actor_for(user)

        assert not policy.delete(actor, user)
        assert not policy.force_delete(actor, user)
        assert not policy.restore(actor, user)
        assert policy.delete(actor, other_user)

    def test_never_toggle_own_activation(self, user, other_user, actor_for):
        policy = policy_for(user)
        actor = actor_for(user)

        assert not policy.activate(actor, user)
        assert not policy.deactivate(actor, user)
        assert policy.activate(actor, other_user)
        assert policy.deactivate(actor, other_user)


@pytest.mark.django_db
class TestOpenPolicies:

    @pytest.mark.parametrize("model", [Gender, Category, ExpenseType])
    def test_reference_data_is_open(self, model, nobody, actor_for):
        policy = policy_for(model)
        actor = actor_for(nobody)

        assert policy.view_any(actor)
        assert policy.create(actor)
        assert policy.force_delete(actor, object())

    def test_unregistered_model_denies(self, user, actor_for):
        assert not policy_for(Grant).view_any(actor_for(user))
