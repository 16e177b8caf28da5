"""
Policy-gated record operations shared by every resource.

Views call these instead of touching models directly, so every mutation
is authorized against the registered record policy and logged the same
way. Denials raise DRF ``PermissionDenied`` (HTTP 403); lookups are the
caller's job and happen before authorization.
"""

import copy
import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from accounts import grants
from accounts.authz import ActorContext
from accounts.policies import policy_for

logger = logging.getLogger(__name__)

_OBJECT_ACTIONS = {"view", "update", "delete", "restore", "force_delete", "activate", "deactivate"}


def allows(actor: ActorContext, action: str, model, obj=None) -> bool:
    policy = policy_for(model)
    check = getattr(policy, action)
    if action in _OBJECT_ACTIONS:
        return check(actor, obj)
    return check(actor)


def authorize(actor: ActorContext, action: str, model, obj=None) -> None:
    """Raise PermissionDenied unless the policy allows ``action``."""
    if allows(actor, action, model, obj):
        return
    logger.info(
        "Record access denied",
        extra={
            "user_id": actor.user_id,
            "model": model._meta.label,
            "action": action,
            "object_id": getattr(obj, "pk", None),
        },
    )
    raise PermissionDenied("You do not have permission to perform this action.")


def _log(message, actor, obj):
    logger.info(
        message,
        extra={"user_id": actor.user_id, "model": obj._meta.label, "object_id": obj.pk},
    )


# =============================================================================
# Listing
# =============================================================================

def visible(queryset, actor: ActorContext):
    """Apply the model's scoped listing filter when it has one."""
    if hasattr(queryset, "visible_to"):
        return queryset.visible_to(actor)
    return queryset


def list_records(queryset, actor: ActorContext, search=None, sort=None, direction="asc"):
    """Scope first, then search and sort. Pagination is left to the view."""
    authorize(actor, "view_any", queryset.model)
    queryset = visible(queryset, actor)
    return queryset.search(search).sorted_by(sort, direction)


# =============================================================================
# Mutations
# =============================================================================

def _candidate(serializer):
    """Unsaved copy of the record as it would look after ``serializer.save()``."""
    if serializer.instance is not None:
        candidate = copy.copy(serializer.instance)
    else:
        candidate = serializer.Meta.model()
    for name, value in serializer.validated_data.items():
        setattr(candidate, name, value)
    return candidate


def _authorize_result(actor: ActorContext, serializer) -> None:
    """The written record must stay inside what ``actor`` may view."""
    authorize(actor, "view", serializer.Meta.model, _candidate(serializer))


@transaction.atomic
def create_record(actor: ActorContext, serializer):
    """Authorize, validate and save ``serializer`` as a new record."""
    authorize(actor, "create", serializer.Meta.model)
    serializer.is_valid(raise_exception=True)
    _authorize_result(actor, serializer)
    obj = serializer.save()
    _log("Record created", actor, obj)
    return obj


@transaction.atomic
def update_record(actor: ActorContext, serializer):
    obj = serializer.instance
    authorize(actor, "update", type(obj), obj)
    serializer.is_valid(raise_exception=True)
    _authorize_result(actor, serializer)
    obj = serializer.save()
    _log("Record updated", actor, obj)
    return obj


@transaction.atomic
def delete_record(actor: ActorContext, obj) -> None:
    authorize(actor, "delete", type(obj), obj)
    obj.delete()
    _log("Record soft-deleted", actor, obj)


@transaction.atomic
def restore_record(actor: ActorContext, obj):
    authorize(actor, "restore", type(obj), obj)
    if obj.is_trashed:
        obj.restore()
        _log("Record restored", actor, obj)
    return obj


@transaction.atomic
def force_delete_record(actor: ActorContext, obj) -> None:
    authorize(actor, "force_delete", type(obj), obj)
    pk = obj.pk
    grants.purge_for_target(obj)
    obj.force_delete()
    logger.info(
        "Record purged",
        extra={"user_id": actor.user_id, "model": obj._meta.label, "object_id": pk},
    )


@transaction.atomic
def set_active(actor: ActorContext, obj, active: bool):
    """Turn sign-in on or off for ``obj`` (users only)."""
    authorize(actor, "activate" if active else "deactivate", type(obj), obj)
    if obj.is_active != active:
        obj.is_active = active
        obj.save(update_fields=["is_active"])
        _log("Record activated" if active else "Record deactivated", actor, obj)
    return obj


# =============================================================================
# Statistics
# =============================================================================

def statistics(model, actor: ActorContext) -> dict:
    """
    Counts over the records ``actor`` may list.

    ``deleted`` counts trashed rows under the same scope; the ``created_*``
    windows count live rows and start at local midnight, Monday and the
    first of the month respectively.
    """
    authorize(actor, "view_any", model)

    live = visible(model.all_objects.alive(), actor)
    trashed = visible(model.all_objects.dead(), actor)
    created = live.created_field

    today = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    week = today - timedelta(days=today.weekday())
    month = today.replace(day=1)

    return {
        "total": live.count(),
        "deleted": trashed.count(),
        "created_today": live.filter(**{f"{created}__gte": today}).count(),
        "created_this_week": live.filter(**{f"{created}__gte": week}).count(),
        "created_this_month": live.filter(**{f"{created}__gte": month}).count(),
    }
