# tests/test_provisioning.py
"""
Tests for new-user provisioning.

Tests cover:
- Sentinel company creation on first user
- Every later user attached to the same sentinel
- Trashed sentinel restored
- Concurrent sentinel creation (IntegrityError retry and fallback read)
- post_save -> on_commit dispatch (inline and through Celery)
"""

import logging
from unittest import mock

import pytest
from django.db import IntegrityError
from django.test import override_settings

from accounts import grants
from accounts.authz import ActorContext, has_company_access
from accounts.models import Company, Grant, TargetKind
from accounts.provisioning import SENTINEL_ATTEMPTS, get_sentinel_company, provision_user
from accounts.tasks import provision_user_task


# =============================================================================
# provision_user
# =============================================================================

@pytest.mark.django_db
class TestProvisionUser:

    def test_first_user_creates_sentinel(self, user):
        grant = provision_user(user)

        sentinel = Company.objects.get(is_main=True)
        assert sentinel.name == "Main"
        assert grant.target_kind == TargetKind.COMPANY
        assert grant.target_id == sentinel.pk
        assert has_company_access(ActorContext.for_user(user))

    def test_second_user_joins_same_sentinel(self, user, other_user):
        first = provision_user(user)
        second = provision_user(other_user)

        assert Company.all_objects.filter(is_main=True).count() == 1
        assert first.target_id == second.target_id

    def test_provisioning_twice_is_idempotent(self, user):
        provision_user(user)
        provision_user(user)

        assert Grant.objects.filter(user=user).count() == 1

    def test_trashed_sentinel_is_restored(self, user):
        sentinel = get_sentinel_company()
        sentinel.delete()

        provision_user(user)

        sentinel.refresh_from_db()
        assert not sentinel.is_trashed

    @override_settings(SENTINEL_COMPANY_NAME="Headquarters")
    def test_sentinel_name_from_settings(self, user):
        provision_user(user)

        assert Company.objects.get(is_main=True).name == "Headquarters"

    def test_logs_creation_and_assignment(self, user, caplog):
        with caplog.at_level(logging.INFO, logger="accounts"):
            provision_user(user)

        messages = [r.getMessage() for r in caplog.records]
        assert "Main company created for first user" in messages
        assert "Company access assigned to user" in messages

    def test_creation_logged_once(self, user, other_user, caplog):
        with caplog.at_level(logging.INFO, logger="accounts"):
            provision_user(user)
            caplog.clear()
            provision_user(other_user)

        messages = [r.getMessage() for r in caplog.records]
        assert "Main company created for first user" not in messages
        assert "Company access assigned to user" in messages

    def test_sentinel_race_retries_and_joins_winner(self, user, caplog):
        real_get_or_create = Company.all_objects.get_or_create
        calls = []

        def racing_get_or_create(**kwargs):
            calls.append(kwargs)
            if len(calls) == 1:
                raise IntegrityError("duplicate key value violates accounts_company_single_sentinel")
            return real_get_or_create(**kwargs)

        with mock.patch.object(Company.all_objects, "get_or_create", side_effect=racing_get_or_create):
            with caplog.at_level(logging.WARNING, logger="accounts"):
                grant = provision_user(user)

        sentinel = Company.all_objects.get(is_main=True)
        assert Company.all_objects.filter(is_main=True).count() == 1
        assert len(calls) == 2
        assert grant.target_id == sentinel.pk
        assert grants.exists(user, TargetKind.COMPANY, sentinel.pk)
        assert "Sentinel company creation raced, retrying" in [r.getMessage() for r in caplog.records]

    def test_sentinel_race_falls_back_to_reading_winner(self, user):
        winner = Company.all_objects.create(name="Main", is_main=True)

        with mock.patch.object(
            Company.all_objects, "get_or_create", side_effect=IntegrityError("raced")
        ) as get_or_create:
            grant = provision_user(user)

        assert get_or_create.call_count == SENTINEL_ATTEMPTS
        assert grant.target_id == winner.pk
        assert Company.all_objects.filter(is_main=True).count() == 1

    def test_grant_failure_is_logged_and_raised(self, user, caplog):
        with mock.patch.object(grants, "grant", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                provision_user(user)

        assert any(r.getMessage() == "User provisioning failed" for r in caplog.records)


# =============================================================================
# Dispatch
# =============================================================================

@pytest.mark.django_db
class TestProvisioningDispatch:

    @override_settings(PROVISIONING_SYNC=True)
    def test_user_creation_provisions_after_commit(self, make_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            u = make_user("Fresh")

        assert len(callbacks) == 1
        assert grants.list_target_ids(u, TargetKind.COMPANY) == frozenset(
            {Company.objects.get(is_main=True).pk}
        )

    def test_nothing_happens_before_commit(self, make_user):
        u = make_user("Pending")

        assert not Grant.objects.filter(user=u).exists()

    def test_updates_do_not_reprovision(self, user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            user.name = "Renamed"
            user.save()

        assert callbacks == []

    @override_settings(PROVISIONING_SYNC=False)
    def test_async_path_enqueues_task(self, make_user, django_capture_on_commit_callbacks):
        with mock.patch.object(provision_user_task, "delay") as delay:
            with django_capture_on_commit_callbacks(execute=True):
                u = make_user("Queued")

        delay.assert_called_once_with(u.pk)

    def test_task_provisions_user(self, user):
        result = provision_user_task.apply(args=[user.pk]).get()

        assert result["user_id"] == user.pk
        assert grants.exists(user, TargetKind.COMPANY, result["company_id"])

    def test_task_reports_missing_user(self):
        result = provision_user_task.apply(args=[987654]).get()

        assert "error" in result
