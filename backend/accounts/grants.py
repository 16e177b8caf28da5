"""
Grant store.

Grants are the only authorization primitive: a row names one user, one
target kind and one target id. Everything that asks "may this user touch
that record" is answered from here.

Liveness rules:
- ``exists`` / ``list_target_ids`` / ``snapshot`` only see live grants.
- ``exists_including_revoked`` sees every grant ever issued for the triple.
  Restore checks use it because the target row may itself be trashed.

Writes propagate persistence errors to the caller.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.models import Grant, TargetKind

logger = logging.getLogger(__name__)

_KIND_BY_LABEL = {
    "accounts.Company": TargetKind.COMPANY,
    "catalog.Brand": TargetKind.BRAND,
    "catalog.Product": TargetKind.PRODUCT,
    "accounts.Grant": TargetKind.GRANT,
    settings.AUTH_USER_MODEL: TargetKind.USER,
}


def kind_of(instance) -> TargetKind:
    """Return the grant kind for a model instance (or model class)."""
    label = instance._meta.label
    try:
        return _KIND_BY_LABEL[label]
    except KeyError:
        raise ValueError(f"{label} cannot be the target of a grant.") from None


def grant(user, kind: TargetKind, target_id: int) -> Grant:
    """
    Give ``user`` a live grant on ``(kind, target_id)``.

    Returns the existing live grant when there already is one; the database
    refuses a second live row for the same triple.
    """
    kind = TargetKind(kind)
    obj, created = Grant.objects.live().get_or_create(
        user=user,
        target_kind=kind,
        target_id=target_id,
    )
    if created:
        logger.info(
            "Grant issued",
            extra={"user_id": user.pk, "target_kind": kind.value, "target_id": target_id},
        )
    return obj


def grant_to(user, instance) -> Grant:
    """Grant ``user`` access to a Company, Brand, Product, User or Grant instance."""
    return grant(user, kind_of(instance), instance.pk)


@transaction.atomic
def revoke(grant_id: int) -> bool:
    updated = Grant.objects.live().filter(pk=grant_id).update(revoked_at=timezone.now())
    if updated:
        logger.info("Grant revoked", extra={"grant_id": grant_id})
    return bool(updated)


@transaction.atomic
def purge(grant_id: int) -> bool:
    deleted, _ = Grant.objects.filter(pk=grant_id).delete()
    if deleted:
        logger.info("Grant purged", extra={"grant_id": grant_id})
    return bool(deleted)


@transaction.atomic
def purge_for_target(instance) -> int:
    """Delete every grant, live or revoked, that points at ``instance``."""
    kind = _KIND_BY_LABEL.get(instance._meta.label)
    if kind is None:
        return 0
    deleted, _ = Grant.objects.filter(target_kind=kind, target_id=instance.pk).delete()
    if deleted:
        logger.info(
            "Grants purged with their target",
            extra={"target_kind": kind.value, "target_id": instance.pk, "count": deleted},
        )
    return deleted


def exists(user, kind: TargetKind, target_id: int) -> bool:
    return Grant.objects.live().filter(
        user=user, target_kind=kind, target_id=target_id
    ).exists()


def exists_including_revoked(user, kind: TargetKind, target_id: int) -> bool:
    return Grant.objects.filter(
        user=user, target_kind=kind, target_id=target_id
    ).exists()


def list_target_ids(user, kind: TargetKind) -> FrozenSet[int]:
    return frozenset(
        Grant.objects.live()
        .filter(user=user, target_kind=kind)
        .values_list("target_id", flat=True)
    )


def snapshot(user, kinds: Optional[tuple] = None) -> Dict[TargetKind, FrozenSet[int]]:
    """
    Load every live target id of ``user`` grouped by kind, in one query.

    Kinds without grants map to an empty frozenset.
    """
    kinds = tuple(kinds or TargetKind)
    grouped = {kind: set() for kind in kinds}
    rows = (
        Grant.objects.live()
        .filter(user=user, target_kind__in=[k.value for k in kinds])
        .values_list("target_kind", "target_id")
    )
    for target_kind, target_id in rows:
        grouped[TargetKind(target_kind)].add(target_id)
    return {kind: frozenset(ids) for kind, ids in grouped.items()}
