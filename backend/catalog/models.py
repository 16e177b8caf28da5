from django.db import models
from django.db.models import Q
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _

from accounts.listing import ListingQuerySet
from accounts.slugs import unique_slug
from accounts.softdelete import SoftDeleteManager, SoftDeleteModel


class SluggedModel(SoftDeleteModel):
    """Soft-deletable model addressed by a slug generated once from its name."""

    slug_source = "name"
    unique_slugs = True

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self.slug:
            source = getattr(self, self.slug_source) or ""
            if self.unique_slugs:
                self.slug = unique_slug(type(self), source)
            else:
                self.slug = slugify(source)[:255] or self._meta.model_name
        super().save(*args, **kwargs)


# =============================================================================
# Reference data (open to every authenticated user)
# =============================================================================

class Category(SluggedModel):
    external_id = models.PositiveBigIntegerField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)

    objects = SoftDeleteManager.from_queryset(ListingQuerySet)()
    all_objects = models.Manager.from_queryset(ListingQuerySet)()

    class Meta:
        verbose_name = _("Category")
        verbose_name_plural = _("Categories")

    def __str__(self):
        return self.name


class Gender(SluggedModel):
    external_id = models.PositiveBigIntegerField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)

    objects = SoftDeleteManager.from_queryset(ListingQuerySet)()
    all_objects = models.Manager.from_queryset(ListingQuerySet)()

    class Meta:
        verbose_name = _("Gender")
        verbose_name_plural = _("Genders")

    def __str__(self):
        return self.name


class ExpenseType(SluggedModel):
    # Legacy ExpenseTypeID; expenses reference it.
    external_id = models.PositiveBigIntegerField(unique=True)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)

    objects = SoftDeleteManager.from_queryset(ListingQuerySet)()
    all_objects = models.Manager.from_queryset(ListingQuerySet)()

    class Meta:
        verbose_name = _("Expense type")
        verbose_name_plural = _("Expense types")

    def __str__(self):
        return self.name


# =============================================================================
# Access-scoped catalog
# =============================================================================

class BrandQuerySet(ListingQuerySet):
    pass


class Brand(SluggedModel):
    unique_slugs = False

    external_id = models.PositiveBigIntegerField(unique=True, null=True, blank=True)
    name = models.CharField(max_length=255)
    # Brand slugs may repeat; lookups take the oldest match.
    slug = models.SlugField(max_length=255, blank=True)

    objects = SoftDeleteManager.from_queryset(BrandQuerySet)()
    all_objects = models.Manager.from_queryset(BrandQuerySet)()

    class Meta:
        verbose_name = _("Brand")
        verbose_name_plural = _("Brands")

    def __str__(self):
        return self.name


class ProductQuerySet(ListingQuerySet):
    sortable_fields = ("name", "slug", "external_id", "created_at", "updated_at")

    def visible_to(self, actor):
        from catalog.scoping import scope_products

        return scope_products(self, actor)

    def for_brand(self, brand):
        return self.filter(brand=brand)

    def for_category(self, category):
        return self.filter(Q(main_category=category) | Q(marketing_category=category))

    def for_gender(self, gender):
        return self.filter(gender=gender)


class Product(SluggedModel):
    # Legacy ProductID: the natural key items and expenses point at.
    external_id = models.PositiveBigIntegerField(unique=True)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)
    new_system = models.BooleanField(default=False)
    is_visible = models.BooleanField(default=True)
    flyer = models.CharField(max_length=255, blank=True)
    brand = models.ForeignKey(
        Brand,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    gender = models.ForeignKey(
        Gender,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    main_category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="main_products",
    )
    marketing_category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="marketing_products",
    )

    objects = SoftDeleteManager.from_queryset(ProductQuerySet)()
    all_objects = models.Manager.from_queryset(ProductQuerySet)()

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        indexes = [
            models.Index(fields=["brand", "deleted_at"], name="catalog_product_brand_live"),
        ]

    def __str__(self):
        return self.name


class ProductItemQuerySet(ListingQuerySet):
    search_fields = ("name", "sku", "slug")
    sortable_fields = ("name", "sku", "slug", "quantity", "external_id", "created_at", "updated_at")

    def visible_to(self, actor):
        from catalog.scoping import scope_product_items

        return scope_product_items(self, actor)

    def for_product(self, product):
        return self.filter(product_id=product.external_id)

    def for_brand(self, brand):
        return self.filter(product_id__in=Product.objects.filter(brand=brand).values("external_id"))

    def for_category(self, category):
        return self.filter(
            product_id__in=Product.objects.for_category(category).values("external_id")
        )

    def for_gender(self, gender):
        return self.filter(product_id__in=Product.objects.for_gender(gender).values("external_id"))

    def with_flags(self, active=None, up_sell=None, extra_product=None, flagged_deleted=None):
        flags = {
            "active": active,
            "up_sell": up_sell,
            "extra_product": extra_product,
            "is_flagged_deleted": flagged_deleted,
        }
        return self.filter(**{name: value for name, value in flags.items() if value is not None})


class ProductItem(SluggedModel):
    # Legacy ItemID.
    external_id = models.PositiveBigIntegerField(unique=True, null=True, blank=True)
    # References Product.external_id; legacy rows may point at products that
    # were never imported, hence no database constraint.
    product = models.ForeignKey(
        Product,
        to_field="external_id",
        db_column="product_external_id",
        db_constraint=False,
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name="items",
    )
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)
    sku = models.CharField(max_length=64, blank=True)
    quantity = models.IntegerField(default=0)
    up_sell = models.BooleanField(default=False)
    extra_product = models.BooleanField(default=False)
    offer_products = models.CharField(max_length=255, blank=True)
    active = models.BooleanField(default=True)
    # Legacy "deleted" flag, independent of soft deletion.
    is_flagged_deleted = models.BooleanField(default=False)

    objects = SoftDeleteManager.from_queryset(ProductItemQuerySet)()
    all_objects = models.Manager.from_queryset(ProductItemQuerySet)()

    class Meta:
        verbose_name = _("Product item")
        verbose_name_plural = _("Product items")

    def __str__(self):
        return self.name


class ExpenseQuerySet(ListingQuerySet):
    search_fields = ("expense_type__name",)
    sortable_fields = ("expense_date", "amount", "external_id", "created_at", "updated_at")
    default_ordering = ("-expense_date", "-created_at", "-pk")

    def visible_to(self, actor):
        from catalog.scoping import scope_expenses

        return scope_expenses(self, actor)

    def for_product(self, product):
        return self.filter(product_id=product.external_id)

    def for_expense_type(self, expense_type):
        return self.filter(expense_type_id=expense_type.external_id)

    def for_brand(self, brand):
        return self.filter(product_id__in=Product.objects.filter(brand=brand).values("external_id"))

    def for_category(self, category):
        return self.filter(
            product_id__in=Product.objects.for_category(category).values("external_id")
        )

    def for_gender(self, gender):
        return self.filter(product_id__in=Product.objects.for_gender(gender).values("external_id"))

    def between_dates(self, start=None, end=None):
        qs = self
        if start is not None:
            qs = qs.filter(expense_date__gte=start)
        if end is not None:
            qs = qs.filter(expense_date__lte=end)
        return qs

    def on_date(self, day):
        return self.filter(expense_date=day)


class Expense(SoftDeleteModel):
    external_id = models.PositiveBigIntegerField(unique=True, null=True, blank=True)
    product = models.ForeignKey(
        Product,
        to_field="external_id",
        db_column="product_external_id",
        db_constraint=False,
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name="expenses",
    )
    expense_type = models.ForeignKey(
        ExpenseType,
        to_field="external_id",
        db_column="expense_type_external_id",
        db_constraint=False,
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name="expenses",
    )
    expense_date = models.DateField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SoftDeleteManager.from_queryset(ExpenseQuerySet)()
    all_objects = models.Manager.from_queryset(ExpenseQuerySet)()

    class Meta:
        verbose_name = _("Expense")
        verbose_name_plural = _("Expenses")
        indexes = [
            models.Index(fields=["product", "expense_date"], name="catalog_expense_product_date"),
        ]

    def __str__(self):
        return f"{self.product_id} {self.expense_date} {self.amount}"
