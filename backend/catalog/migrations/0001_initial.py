import django.db.models.deletion
from django.db import migrations, models


def _id():
    return ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID"))


def _trash_and_timestamps():
    return [
        ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(blank=True, null=True, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
            ],
            options={"verbose_name": "Category", "verbose_name_plural": "Categories"},
        ),
        migrations.CreateModel(
            name="Gender",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(blank=True, null=True, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
            ],
            options={"verbose_name": "Gender", "verbose_name_plural": "Genders"},
        ),
        migrations.CreateModel(
            name="ExpenseType",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
            ],
            options={"verbose_name": "Expense type", "verbose_name_plural": "Expense types"},
        ),
        migrations.CreateModel(
            name="Brand",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(blank=True, null=True, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, max_length=255)),
            ],
            options={"verbose_name": "Brand", "verbose_name_plural": "Brands"},
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
                ("new_system", models.BooleanField(default=False)),
                ("is_visible", models.BooleanField(default=True)),
                ("flyer", models.CharField(blank=True, max_length=255)),
                (
                    "brand",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.brand",
                    ),
                ),
                (
                    "gender",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.gender",
                    ),
                ),
                (
                    "main_category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="main_products",
                        to="catalog.category",
                    ),
                ),
                (
                    "marketing_category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="marketing_products",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "indexes": [
                    models.Index(fields=["brand", "deleted_at"], name="catalog_product_brand_live"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductItem",
            fields=[
                _id(),
                *_trash_and_timestamps(),
                ("external_id", models.PositiveBigIntegerField(blank=True, null=True, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
                ("sku", models.CharField(blank=True, max_length=64)),
                ("quantity", models.IntegerField(default=0)),
                ("up_sell", models.BooleanField(default=False)),
                ("extra_product", models.BooleanField(default=False)),
                ("offer_products", models.CharField(blank=True, max_length=255)),
                ("active", models.BooleanField(default=True)),
                ("is_flagged_deleted", models.BooleanField(default=False)),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        db_column="product_external_id",
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="items",
                        to="catalog.product",
                        to_field="external_id",
                    ),
                ),
            ],
            options={"verbose_name": "Product item", "verbose_name_plural": "Product items"},
        ),
        migrations.CreateModel(
            name="Expense",
            fields=[
                _id(),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("external_id", models.PositiveBigIntegerField(blank=True, null=True, unique=True)),
                ("expense_date", models.DateField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        db_column="product_external_id",
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="expenses",
                        to="catalog.product",
                        to_field="external_id",
                    ),
                ),
                (
                    "expense_type",
                    models.ForeignKey(
                        blank=True,
                        db_column="expense_type_external_id",
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="expenses",
                        to="catalog.expensetype",
                        to_field="external_id",
                    ),
                ),
            ],
            options={
                "verbose_name": "Expense",
                "verbose_name_plural": "Expenses",
                "indexes": [
                    models.Index(fields=["product", "expense_date"], name="catalog_expense_product_date"),
                ],
            },
        ),
    ]
