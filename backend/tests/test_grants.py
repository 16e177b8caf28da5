# tests/test_grants.py
"""
Tests for the grant store.

Tests cover:
- Issuing grants (idempotent for live grants)
- Revoke vs purge
- Live-only vs including-revoked lookups
- Snapshot grouping by kind
"""

import pytest
from django.db import IntegrityError, transaction

from accounts import grants
from accounts.models import Grant, TargetKind


# =============================================================================
# Issuing
# =============================================================================

@pytest.mark.django_db
class TestGrant:

    def test_grant_creates_live_row(self, user, company):
        g = grants.grant(user, TargetKind.COMPANY, company.pk)

        assert g.is_live
        assert g.user == user
        assert g.target_kind == TargetKind.COMPANY
        assert g.target_id == company.pk

    def test_grant_is_idempotent_for_live_grants(self, user, company):
        first = grants.grant(user, TargetKind.COMPANY, company.pk)
        second = grants.grant(user, TargetKind.COMPANY, company.pk)

        assert first.pk == second.pk
        assert Grant.objects.filter(user=user).count() == 1

    def test_grant_after_revoke_creates_new_row(self, user, company):
        first = grants.grant(user, TargetKind.COMPANY, company.pk)
        grants.revoke(first.pk)

        second = grants.grant(user, TargetKind.COMPANY, company.pk)

        assert second.pk != first.pk
        assert Grant.objects.filter(user=user).count() == 2

    def test_database_refuses_duplicate_live_grant(self, user, company):
        Grant.objects.create(user=user, target_kind=TargetKind.COMPANY, target_id=company.pk)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Grant.objects.create(user=user, target_kind=TargetKind.COMPANY, target_id=company.pk)

    def test_grant_to_maps_instance_to_kind(self, user, brand_a, product_a1, company):
        assert grants.grant_to(user, brand_a).target_kind == TargetKind.BRAND
        assert grants.grant_to(user, product_a1).target_kind == TargetKind.PRODUCT
        assert grants.grant_to(user, company).target_kind == TargetKind.COMPANY
        assert grants.grant_to(user, user).target_kind == TargetKind.USER

    def test_grant_to_rejects_unsupported_models(self, user, gender):
        with pytest.raises(ValueError):
            grants.grant_to(user, gender)

    def test_same_target_id_different_kinds_are_independent(self, user):
        grants.grant(user, TargetKind.BRAND, 5)
        grants.grant(user, TargetKind.PRODUCT, 5)

        assert grants.exists(user, TargetKind.BRAND, 5)
        assert grants.exists(user, TargetKind.PRODUCT, 5)
        assert not grants.exists(user, TargetKind.COMPANY, 5)


# =============================================================================
# Revoke / Purge
# =============================================================================

@pytest.mark.django_db
class TestRevokeAndPurge:

    def test_revoke_hides_grant_from_live_lookups(self, user, brand_a):
        g = grants.grant(user, TargetKind.BRAND, brand_a.pk)

        assert grants.revoke(g.pk) is True

        assert not grants.exists(user, TargetKind.BRAND, brand_a.pk)
        assert grants.exists_including_revoked(user, TargetKind.BRAND, brand_a.pk)
        assert brand_a.pk not in grants.list_target_ids(user, TargetKind.BRAND)

    def test_revoke_twice_returns_false(self, user, brand_a):
        g = grants.grant(user, TargetKind.BRAND, brand_a.pk)
        grants.revoke(g.pk)

        assert grants.revoke(g.pk) is False

    def test_revoke_missing_grant_returns_false(self):
        assert grants.revoke(123456) is False

    def test_purge_removes_row(self, user, brand_a):
        g = grants.grant(user, TargetKind.BRAND, brand_a.pk)

        assert grants.purge(g.pk) is True

        assert not Grant.objects.filter(pk=g.pk).exists()
        assert not grants.exists_including_revoked(user, TargetKind.BRAND, brand_a.pk)

    def test_purge_revoked_grant(self, user, brand_a):
        g = grants.grant(user, TargetKind.BRAND, brand_a.pk)
        grants.revoke(g.pk)

        assert grants.purge(g.pk) is True
        assert grants.purge(g.pk) is False

    def test_purge_for_target_removes_every_grant_on_it(self, user, other_user, brand_a, brand_b):
        grants.grant(user, TargetKind.BRAND, brand_a.pk)
        revoked = grants.grant(other_user, TargetKind.BRAND, brand_a.pk)
        grants.revoke(revoked.pk)
        grants.grant(user, TargetKind.BRAND, brand_b.pk)

        assert grants.purge_for_target(brand_a) == 2

        assert not Grant.objects.filter(target_kind=TargetKind.BRAND, target_id=brand_a.pk).exists()
        assert grants.exists(user, TargetKind.BRAND, brand_b.pk)

    def test_purge_for_target_ignores_ungrantable_models(self, category):
        assert grants.purge_for_target(category) == 0


# =============================================================================
# Lookups
# =============================================================================

@pytest.mark.django_db
class TestLookups:

    def test_list_target_ids_is_per_user_and_kind(self, user, other_user):
        grants.grant(user, TargetKind.PRODUCT, 1)
        grants.grant(user, TargetKind.PRODUCT, 2)
        grants.grant(user, TargetKind.BRAND, 3)
        grants.grant(other_user, TargetKind.PRODUCT, 4)

        assert grants.list_target_ids(user, TargetKind.PRODUCT) == frozenset({1, 2})
        assert grants.list_target_ids(other_user, TargetKind.PRODUCT) == frozenset({4})

    def test_snapshot_groups_live_grants_by_kind(self, user):
        grants.grant(user, TargetKind.COMPANY, 1)
        grants.grant(user, TargetKind.BRAND, 2)
        revoked = grants.grant(user, TargetKind.PRODUCT, 3)
        grants.revoke(revoked.pk)

        loaded = grants.snapshot(user)

        assert loaded[TargetKind.COMPANY] == frozenset({1})
        assert loaded[TargetKind.BRAND] == frozenset({2})
        assert loaded[TargetKind.PRODUCT] == frozenset()
        assert set(loaded) == set(TargetKind)

    def test_snapshot_restricted_to_kinds(self, user):
        grants.grant(user, TargetKind.USER, 9)

        loaded = grants.snapshot(user, kinds=(TargetKind.COMPANY,))

        assert loaded == {TargetKind.COMPANY: frozenset()}

    def test_liveness_ignores_target_trash_state(self, user, brand_a):
        grants.grant(user, TargetKind.BRAND, brand_a.pk)
        brand_a.delete()

        assert grants.exists(user, TargetKind.BRAND, brand_a.pk)
