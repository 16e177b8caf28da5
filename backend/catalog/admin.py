from django.contrib import admin

from .models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem


class TrashAwareAdmin(admin.ModelAdmin):
    """Show trashed rows too; the list filter separates them."""

    list_filter = (("deleted_at", admin.EmptyFieldListFilter),)
    readonly_fields = ("deleted_at",)

    def get_queryset(self, request):
        return self.model.all_objects.all()


@admin.register(Category, Gender, ExpenseType)
class ReferenceAdmin(TrashAwareAdmin):
    list_display = ("name", "slug", "external_id", "deleted_at")
    search_fields = ("name", "slug")


@admin.register(Brand)
class BrandAdmin(TrashAwareAdmin):
    list_display = ("name", "slug", "external_id", "deleted_at")
    search_fields = ("name", "slug")


@admin.register(Product)
class ProductAdmin(TrashAwareAdmin):
    list_display = ("name", "external_id", "brand", "is_visible", "deleted_at")
    list_select_related = ("brand",)
    search_fields = ("name", "slug", "external_id")
    raw_id_fields = ("brand", "gender", "main_category", "marketing_category")


@admin.register(ProductItem)
class ProductItemAdmin(TrashAwareAdmin):
    list_display = ("name", "sku", "product_id", "quantity", "active", "deleted_at")
    search_fields = ("name", "sku", "slug")
    raw_id_fields = ("product",)


@admin.register(Expense)
class ExpenseAdmin(TrashAwareAdmin):
    list_display = ("expense_date", "product_id", "expense_type_id", "amount", "deleted_at")
    date_hierarchy = "expense_date"
    raw_id_fields = ("product", "expense_type")
