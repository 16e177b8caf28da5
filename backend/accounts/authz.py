# accounts/authz.py
"""
Authorization utilities for the catalog.

Provides:
- ActorContext: Immutable snapshot of the current user's live grants
- resolve_actor: Build the actor context for a request
- has_* functions: the capability resolver

Capability precedence (fixed):
1. Company grant: access to everything
2. Product grants: exactly the granted products, nothing else
3. Brand grants: products whose brand is granted
4. No grants: nothing

Once a user holds any product grant, brand grants are NOT consulted for
products. Grants are loaded fresh for every request and never cached across
requests, so revocations take effect immediately.

Every has_* function is pure over the snapshot: no queries, no exceptions,
"no access" is simply False.
"""

from dataclasses import dataclass
from typing import FrozenSet

from rest_framework.exceptions import NotAuthenticated

from accounts import grants
from accounts.models import TargetKind

_SCOPED_KINDS = (TargetKind.COMPANY, TargetKind.BRAND, TargetKind.PRODUCT)


@dataclass(frozen=True)
class ActorContext:
    """
    Immutable context for the current actor.

    This is passed to policies, scoping functions and services so that none
    of them resolve the user from ambient state.

    Attributes:
        user: The authenticated user
        company_ids: Companies the user holds live grants on
        brand_ids: Brands the user holds live grants on
        product_ids: Products the user holds live grants on
    """
    user: object  # User model
    company_ids: FrozenSet[int] = frozenset()
    brand_ids: FrozenSet[int] = frozenset()
    product_ids: FrozenSet[int] = frozenset()

    @classmethod
    def for_user(cls, user) -> "ActorContext":
        """Load a fresh grant snapshot for ``user``."""
        if user is None or user.pk is None:
            return cls(user=user)
        loaded = grants.snapshot(user, kinds=_SCOPED_KINDS)
        return cls(
            user=user,
            company_ids=loaded[TargetKind.COMPANY],
            brand_ids=loaded[TargetKind.BRAND],
            product_ids=loaded[TargetKind.PRODUCT],
        )

    @property
    def user_id(self):
        return getattr(self.user, "pk", None)

    @property
    def is_authenticated(self) -> bool:
        """Mirror Django's user.is_authenticated for compatibility."""
        return bool(getattr(self.user, "is_authenticated", False))


def resolve_actor(request) -> ActorContext:
    """
    Build the ActorContext for the current request.

    Raises:
        NotAuthenticated: If user is not authenticated
    """
    user = getattr(request, "user", None)

    if not user or not user.is_authenticated:
        raise NotAuthenticated("Authentication required.")

    return ActorContext.for_user(user)


# =============================================================================
# Capability resolver
# =============================================================================

def has_company_access(actor: ActorContext) -> bool:
    """Company-wide grant: short-circuits every other check."""
    return bool(actor.company_ids)


def has_brand_access(actor: ActorContext, brand) -> bool:
    if has_company_access(actor):
        return True
    return brand is not None and brand.pk in actor.brand_ids


def has_product_access(actor: ActorContext, product) -> bool:
    if has_company_access(actor):
        return True
    if product is None:
        return False
    if actor.product_ids:
        # No fallback to brand grants once product grants exist.
        return product.pk in actor.product_ids
    if actor.brand_ids:
        return product.brand_id is not None and product.brand_id in actor.brand_ids
    return False


def has_any_product_access(actor: ActorContext) -> bool:
    return bool(actor.company_ids or actor.product_ids or actor.brand_ids)


def has_any_brand_access(actor: ActorContext) -> bool:
    return bool(actor.company_ids or actor.brand_ids)
