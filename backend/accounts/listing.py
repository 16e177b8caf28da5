from django.db.models import Q

from accounts.softdelete import SoftDeleteQuerySet


class ListingQuerySet(SoftDeleteQuerySet):
    """
    Search and sort helpers shared by every listable model.

    Subclasses declare which columns are searchable and sortable; unknown
    sort columns fall back to ``default_ordering`` instead of erroring.
    """

    search_fields: tuple = ("name", "slug")
    sortable_fields: tuple = ("name", "slug", "created_at", "updated_at")
    default_ordering: tuple = ("-created_at", "-pk")
    # Creation timestamp used by the dashboard statistics.
    created_field: str = "created_at"

    def search(self, term):
        term = (term or "").strip()
        if not term:
            return self
        condition = Q()
        for field in self.search_fields:
            condition |= Q(**{f"{field}__icontains": term})
        return self.filter(condition)

    def sorted_by(self, column=None, direction="asc"):
        if column and column in self.sortable_fields:
            prefix = "-" if str(direction).lower() == "desc" else ""
            return self.order_by(f"{prefix}{column}", "pk")
        return self.order_by(*self.default_ordering)
