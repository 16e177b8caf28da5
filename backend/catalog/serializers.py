from rest_framework import serializers

from .models import Brand, Category, Expense, ExpenseType, Gender, Product, ProductItem

_TIMESTAMPS = ("created_at", "updated_at", "deleted_at")


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ("id", "external_id", "name", "slug") + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class GenderSerializer(serializers.ModelSerializer):
    class Meta:
        model = Gender
        fields = ("id", "external_id", "name", "slug") + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class ExpenseTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExpenseType
        fields = ("id", "external_id", "name", "slug") + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ("id", "external_id", "name", "slug") + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class ProductSerializer(serializers.ModelSerializer):
    brand_name = serializers.CharField(source="brand.name", read_only=True, default=None)

    class Meta:
        model = Product
        fields = (
            "id",
            "external_id",
            "name",
            "slug",
            "new_system",
            "is_visible",
            "flyer",
            "brand",
            "brand_name",
            "gender",
            "main_category",
            "marketing_category",
        ) + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class ProductKeyMixin:
    """
    Items and expenses reference products by legacy ProductID.

    Legacy rows may point at products that were never imported, so the key
    is exposed as a plain integer; new writes must name a live product.
    """

    def validate_product_id(self, value):
        if value is not None and not Product.objects.filter(external_id=value).exists():
            raise serializers.ValidationError("No product with this ProductID.")
        return value


class ProductItemSerializer(ProductKeyMixin, serializers.ModelSerializer):
    product_id = serializers.IntegerField(allow_null=True, required=False)

    class Meta:
        model = ProductItem
        fields = (
            "id",
            "external_id",
            "product_id",
            "name",
            "slug",
            "sku",
            "quantity",
            "up_sell",
            "extra_product",
            "offer_products",
            "active",
            "is_flagged_deleted",
        ) + _TIMESTAMPS
        read_only_fields = ("slug",) + _TIMESTAMPS


class ExpenseSerializer(ProductKeyMixin, serializers.ModelSerializer):
    product_id = serializers.IntegerField(allow_null=True, required=False)
    expense_type_id = serializers.IntegerField(allow_null=True, required=False)

    class Meta:
        model = Expense
        fields = (
            "id",
            "external_id",
            "product_id",
            "expense_type_id",
            "expense_date",
            "amount",
        ) + _TIMESTAMPS
        read_only_fields = _TIMESTAMPS

    def validate_expense_type_id(self, value):
        if value is not None and not ExpenseType.objects.filter(external_id=value).exists():
            raise serializers.ValidationError("No expense type with this ExpenseTypeID.")
        return value
