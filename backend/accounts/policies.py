"""
Record policies.

Policies answer: "May this actor perform this operation on this record?"
They do NOT perform the operation and they do NOT look the record up;
the view resolves the target (including trashed rows where needed) first.

Every method returns a bool. Denial is turned into an HTTP 403 by the view
layer; policies never raise for "no access".

Usage:
    from accounts.policies import policy_for

    policy = policy_for(Product)
    if not policy.update(actor, product):
        raise PermissionDenied(...)

Operations:
    view_any, create       -> (actor)
    view, update, delete,
    restore, force_delete  -> (actor, obj)

Restore checks never go through relations of the (trashed) target; they
query the grant table directly for the target's own id and kind.
"""

from accounts import grants
from accounts.authz import ActorContext
from accounts.models import Company, TargetKind


class RecordPolicy:
    """Denies everything unless a subclass says otherwise."""

    def view_any(self, actor: ActorContext) -> bool:
        return False

    def view(self, actor: ActorContext, obj) -> bool:
        return False

    def create(self, actor: ActorContext) -> bool:
        return False

    def update(self, actor: ActorContext, obj) -> bool:
        return False

    def delete(self, actor: ActorContext, obj) -> bool:
        return False

    def restore(self, actor: ActorContext, obj) -> bool:
        return False

    def force_delete(self, actor: ActorContext, obj) -> bool:
        return False

    def activate(self, actor: ActorContext, obj) -> bool:
        return False

    def deactivate(self, actor: ActorContext, obj) -> bool:
        return False


class OpenPolicy(RecordPolicy):
    """Reference data every authenticated user may manage."""

    def view_any(self, actor):
        return True

    def view(self, actor, obj):
        return True

    def create(self, actor):
        return True

    def update(self, actor, obj):
        return True

    def delete(self, actor, obj):
        return True

    def restore(self, actor, obj):
        return True

    def force_delete(self, actor, obj):
        return True


# =============================================================================
# Registry
# =============================================================================

_registry = {}


def register(model, policy: RecordPolicy) -> None:
    _registry[model._meta.label] = policy


def policy_for(model_or_instance) -> RecordPolicy:
    """Return the policy registered for a model; unknown models deny everything."""
    return _registry.get(model_or_instance._meta.label, _DENY_ALL)


_DENY_ALL = RecordPolicy()


# =============================================================================
# Company Policies
# =============================================================================

def is_sentinel_company(company) -> bool:
    """The sentinel tenant can never be deleted or purged."""
    return bool(getattr(company, "is_main", False))


class CompanyPolicy(RecordPolicy):
    def view_any(self, actor):
        return True

    def view(self, actor, company):
        return True

    def create(self, actor):
        return True

    def update(self, actor, company):
        return company.pk in actor.company_ids

    def delete(self, actor, company):
        if is_sentinel_company(company):
            return False
        return company.pk in actor.company_ids

    def restore(self, actor, company):
        return grants.exists_including_revoked(actor.user, TargetKind.COMPANY, company.pk)

    def force_delete(self, actor, company):
        if is_sentinel_company(company):
            return False
        return company.pk in actor.company_ids


# =============================================================================
# User Policies
# =============================================================================

def _is_self(actor, user) -> bool:
    return actor.user_id is not None and actor.user_id == user.pk


class UserPolicy(RecordPolicy):
    """Independent of grants: users manage their own profile, never delete themselves."""

    def view_any(self, actor):
        return True

    def view(self, actor, user):
        return True

    def create(self, actor):
        return True

    def update(self, actor, user):
        return _is_self(actor, user)

    def delete(self, actor, user):
        return not _is_self(actor, user)

    def restore(self, actor, user):
        return not _is_self(actor, user)

    def force_delete(self, actor, user):
        return not _is_self(actor, user)

    def activate(self, actor, user):
        return not _is_self(actor, user)

    def deactivate(self, actor, user):
        return not _is_self(actor, user)


def _register_account_policies():
    from django.contrib.auth import get_user_model

    register(Company, CompanyPolicy())
    register(get_user_model(), UserPolicy())


_register_account_policies()
