"""
Catalog app - Brands, products, product items and expenses.

Every list and record operation here is scoped by the caller's grants:
- catalog.scoping narrows listings
- catalog.policies gates single-record operations

Both read the same ActorContext snapshot (see accounts.authz).
"""
