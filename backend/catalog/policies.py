"""
Catalog record policies.

Brands are listable by everyone; changing one needs brand (or company)
access. Products follow the capability resolver directly. Expenses and
product items inherit the decision of the live product they point at
through the legacy ProductID.
"""

from accounts import grants
from accounts.authz import (
    ActorContext,
    has_any_product_access,
    has_brand_access,
    has_company_access,
    has_product_access,
)
from accounts.models import TargetKind
from accounts.policies import OpenPolicy, RecordPolicy, register
from catalog.models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem


# =============================================================================
# Brand Policies
# =============================================================================

class BrandPolicy(RecordPolicy):
    def view_any(self, actor):
        return True

    def view(self, actor, brand):
        return True

    def create(self, actor):
        return True

    def update(self, actor, brand):
        return has_brand_access(actor, brand)

    def delete(self, actor, brand):
        return has_brand_access(actor, brand)

    def restore(self, actor, brand):
        if has_company_access(actor):
            return True
        return grants.exists_including_revoked(actor.user, TargetKind.BRAND, brand.pk)

    def force_delete(self, actor, brand):
        return has_brand_access(actor, brand)


# =============================================================================
# Product Policies
# =============================================================================

class ProductPolicy(RecordPolicy):
    def view_any(self, actor):
        return has_any_product_access(actor)

    def view(self, actor, product):
        return has_product_access(actor, product)

    def create(self, actor):
        return has_any_product_access(actor)

    def update(self, actor, product):
        return has_product_access(actor, product)

    def delete(self, actor, product):
        return has_product_access(actor, product)

    def restore(self, actor, product):
        if has_company_access(actor):
            return True
        return grants.exists_including_revoked(actor.user, TargetKind.PRODUCT, product.pk)

    def force_delete(self, actor, product):
        return has_product_access(actor, product)


# =============================================================================
# Product-owned records (expenses, items)
# =============================================================================

def owning_product(obj):
    """
    Return the live product ``obj`` references, or None.

    Goes through the live manager instead of ``obj.product`` so a trashed
    product never confers access to its expenses or items.
    """
    if obj.product_id is None:
        return None
    return Product.objects.filter(external_id=obj.product_id).first()


def _owner_access(actor: ActorContext, obj) -> bool:
    if has_company_access(actor):
        return True
    return has_product_access(actor, owning_product(obj))


class ProductOwnedPolicy(RecordPolicy):
    def view_any(self, actor):
        return has_any_product_access(actor)

    def view(self, actor, obj):
        return _owner_access(actor, obj)

    def create(self, actor):
        return has_any_product_access(actor)

    def update(self, actor, obj):
        return _owner_access(actor, obj)

    def delete(self, actor, obj):
        return _owner_access(actor, obj)

    def restore(self, actor, obj):
        return _owner_access(actor, obj)

    def force_delete(self, actor, obj):
        return _owner_access(actor, obj)


def _register_catalog_policies():
    register(Brand, BrandPolicy())
    register(Product, ProductPolicy())
    register(Expense, ProductOwnedPolicy())
    register(ProductItem, ProductOwnedPolicy())
    for model in (Category, Gender, ExpenseType):
        register(model, OpenPolicy())


_register_catalog_policies()
