"""
Scoped listing filters.

Each function takes a base queryset and an ActorContext and returns a new,
narrowed queryset. Nothing is mutated, so the same base queryset can be
scoped for several actors.

The precedence is the one used by accounts.authz.has_product_access:

1. Company grant  -> unchanged
2. Product grants -> only those products
3. Brand grants   -> products of those brands
4. Nothing        -> no rows

Items and expenses point at products through the legacy ProductID
(``Product.external_id``), so their filters go through a subquery of live
products. A row whose product is missing or trashed is therefore only
visible with a company grant, exactly as the record policies decide.
"""

from accounts.authz import ActorContext, has_company_access
from catalog.models import Product


def scope_products(queryset, actor: ActorContext):
    if has_company_access(actor):
        return queryset
    if actor.product_ids:
        return queryset.filter(pk__in=actor.product_ids)
    if actor.brand_ids:
        return queryset.filter(brand_id__in=actor.brand_ids)
    return queryset.none()


def _live_product_keys(**lookup):
    return Product.objects.filter(**lookup).values("external_id")


def _scope_by_product_key(queryset, actor: ActorContext):
    if has_company_access(actor):
        return queryset
    if actor.product_ids:
        return queryset.filter(product_id__in=_live_product_keys(pk__in=actor.product_ids))
    if actor.brand_ids:
        return queryset.filter(product_id__in=_live_product_keys(brand_id__in=actor.brand_ids))
    return queryset.none()


def scope_expenses(queryset, actor: ActorContext):
    return _scope_by_product_key(queryset, actor)


def scope_product_items(queryset, actor: ActorContext):
    return _scope_by_product_key(queryset, actor)
