# catalog/views.py
"""
Thin catalog views.

Listing goes through the scoped querysets (``visible_to``) before search,
sort and pagination; single-record endpoints go through the record
policies via accounts.records. Views never decide access themselves.
"""

from accounts.record_views import (
    RecordDetailView,
    RecordForceDeleteView,
    RecordListCreateView,
    RecordListView,
    RecordRestoreView,
    RecordStatisticsView,
)

from . import services
from .models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem
from .serializers import (
    BrandSerializer,
    CategorySerializer,
    ExpenseSerializer,
    ExpenseTypeSerializer,
    GenderSerializer,
    ProductItemSerializer,
    ProductSerializer,
)


# =============================================================================
# Nested listings
# =============================================================================

class NestedListView(RecordListView):
    """
    Read-only listing under a parent record addressed by slug.

    ``parent_filter`` names the queryset method that narrows to the parent.
    """

    parent_model = None
    parent_filter = None

    def filter_listing(self, queryset):
        parent = services.find_by_slug(self.parent_model, self.kwargs["slug"])
        return getattr(queryset, self.parent_filter)(parent)


# =============================================================================
# Reference data
# =============================================================================

class CategoryMixin:
    model = Category
    serializer_class = CategorySerializer


class CategoryListCreateView(CategoryMixin, RecordListCreateView):
    pass


class CategoryDetailView(CategoryMixin, RecordDetailView):
    pass


class CategoryRestoreView(CategoryMixin, RecordRestoreView):
    pass


class CategoryForceDeleteView(CategoryMixin, RecordForceDeleteView):
    pass


class GenderMixin:
    model = Gender
    serializer_class = GenderSerializer


class GenderListCreateView(GenderMixin, RecordListCreateView):
    pass


class GenderDetailView(GenderMixin, RecordDetailView):
    pass


class GenderRestoreView(GenderMixin, RecordRestoreView):
    pass


class GenderForceDeleteView(GenderMixin, RecordForceDeleteView):
    pass


class ExpenseTypeMixin:
    model = ExpenseType
    serializer_class = ExpenseTypeSerializer


class ExpenseTypeListCreateView(ExpenseTypeMixin, RecordListCreateView):
    pass


class ExpenseTypeDetailView(ExpenseTypeMixin, RecordDetailView):
    pass


class ExpenseTypeRestoreView(ExpenseTypeMixin, RecordRestoreView):
    pass


class ExpenseTypeForceDeleteView(ExpenseTypeMixin, RecordForceDeleteView):
    pass


# =============================================================================
# Brands
# =============================================================================

class BrandMixin:
    model = Brand
    serializer_class = BrandSerializer


class BrandListCreateView(BrandMixin, RecordListCreateView):
    """
    GET /api/v1/brands/ -> every live brand (brands are not scoped)
    POST /api/v1/brands/ -> create brand
    """


class BrandDetailView(BrandMixin, RecordDetailView):
    pass


class BrandRestoreView(BrandMixin, RecordRestoreView):
    pass


class BrandForceDeleteView(BrandMixin, RecordForceDeleteView):
    pass


# =============================================================================
# Products
# =============================================================================

class ProductMixin:
    model = Product
    serializer_class = ProductSerializer

    def get_queryset(self):
        return Product.objects.select_related("brand")


class ProductListCreateView(ProductMixin, RecordListCreateView):
    """
    GET /api/v1/products/ -> products visible to the actor
        ?q= &sort= &direction= &brand= &category= &gender= &is_visible=
    POST /api/v1/products/ -> create product
    """

    def filter_listing(self, queryset):
        return services.filter_products(queryset, self.request.query_params)


class ProductDetailView(ProductMixin, RecordDetailView):
    pass


class ProductRestoreView(ProductMixin, RecordRestoreView):
    def get_queryset(self):
        return Product.all_objects.all()


class ProductForceDeleteView(ProductMixin, RecordForceDeleteView):
    def get_queryset(self):
        return Product.all_objects.all()


class NestedProductListView(ProductMixin, NestedListView):
    def filter_listing(self, queryset):
        queryset = super().filter_listing(queryset)
        return services.filter_products(queryset, self.request.query_params)


class BrandProductListView(NestedProductListView):
    """GET /api/v1/brands/<slug>/products/ -> visible products of one brand."""

    parent_model = Brand
    parent_filter = "for_brand"


class CategoryProductListView(NestedProductListView):
    """GET /api/v1/categories/<slug>/products/ (main or marketing category)"""

    parent_model = Category
    parent_filter = "for_category"


class GenderProductListView(NestedProductListView):
    """GET /api/v1/genders/<slug>/products/"""

    parent_model = Gender
    parent_filter = "for_gender"


# =============================================================================
# Product items
# =============================================================================

class ProductItemMixin:
    model = ProductItem
    serializer_class = ProductItemSerializer


class ProductItemListCreateView(ProductItemMixin, RecordListCreateView):
    """
    GET /api/v1/product-items/ -> items of products visible to the actor
        ?q= &product= &brand= &category= &gender=
        &active= &up_sell= &extra_product= &flagged_deleted=
    """

    def filter_listing(self, queryset):
        return services.filter_product_items(queryset, self.request.query_params)


class ProductItemDetailView(ProductItemMixin, RecordDetailView):
    pass


class ProductItemRestoreView(ProductItemMixin, RecordRestoreView):
    pass


class ProductItemForceDeleteView(ProductItemMixin, RecordForceDeleteView):
    pass


# =============================================================================
# Expenses
# =============================================================================

class ExpenseMixin:
    model = Expense
    serializer_class = ExpenseSerializer
    lookup_field = None


class ExpenseListCreateView(ExpenseMixin, RecordListCreateView):
    """
    GET /api/v1/expenses/ -> expenses of products visible to the actor
        ?q= &product= &brand= &category= &gender= &expense_type=
        &date= | &date_from= &date_to=
    """

    def get_queryset(self):
        return Expense.objects.select_related("expense_type")

    def filter_listing(self, queryset):
        return services.filter_expenses(queryset, self.request.query_params)


class ExpenseDetailView(ExpenseMixin, RecordDetailView):
    pass


class ExpenseRestoreView(ExpenseMixin, RecordRestoreView):
    pass


class ExpenseForceDeleteView(ExpenseMixin, RecordForceDeleteView):
    pass


class NestedExpenseListView(ExpenseMixin, NestedListView):
    def get_queryset(self):
        return Expense.objects.select_related("expense_type")

    def filter_listing(self, queryset):
        queryset = super().filter_listing(queryset)
        return services.filter_expenses(queryset, self.request.query_params)


class BrandExpenseListView(NestedExpenseListView):
    """GET /api/v1/brands/<slug>/expenses/"""

    parent_model = Brand
    parent_filter = "for_brand"


class ProductExpenseListView(NestedExpenseListView):
    """GET /api/v1/products/<slug>/expenses/"""

    parent_model = Product
    parent_filter = "for_product"


class CategoryExpenseListView(NestedExpenseListView):
    parent_model = Category
    parent_filter = "for_category"


class GenderExpenseListView(NestedExpenseListView):
    parent_model = Gender
    parent_filter = "for_gender"


class ExpenseTypeExpenseListView(NestedExpenseListView):
    """GET /api/v1/expense-types/<slug>/expenses/"""

    parent_model = ExpenseType
    parent_filter = "for_expense_type"


# =============================================================================
# Statistics
# =============================================================================

class BrandStatisticsView(RecordStatisticsView):
    model = Brand


class ProductStatisticsView(RecordStatisticsView):
    """GET /api/v1/products/statistics/"""

    model = Product


class ProductItemStatisticsView(RecordStatisticsView):
    model = ProductItem


class ExpenseStatisticsView(RecordStatisticsView):
    """GET /api/v1/expenses/statistics/"""

    model = Expense


class CategoryStatisticsView(RecordStatisticsView):
    model = Category


class GenderStatisticsView(RecordStatisticsView):
    model = Gender


class ExpenseTypeStatisticsView(RecordStatisticsView):
    model = ExpenseType
