from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from accounts.listing import ListingQuerySet
from accounts.slugs import unique_slug
from accounts.softdelete import SoftDeleteManager, SoftDeleteModel


class UserQuerySet(ListingQuerySet):
    search_fields = ("name", "email", "username")
    sortable_fields = ("name", "email", "username", "date_joined")
    default_ordering = ("-date_joined", "-pk")
    created_field = "date_joined"


class CompanyQuerySet(ListingQuerySet):
    pass


class UserManager(BaseUserManager.from_queryset(UserQuerySet)):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The given email must be set")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class User(SoftDeleteModel, AbstractUser):
    # Route key; generated from the name once and kept on rename.
    username = models.SlugField("username", max_length=50, unique=True, blank=True)
    email = models.EmailField("email address", unique=True)
    name = models.CharField(max_length=150)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    # Authentication must resolve trashed users too so they can be rejected
    # with a meaningful error instead of "invalid credentials".
    objects = UserManager()
    all_objects = UserManager()

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")

    def save(self, *args, **kwargs):
        if not self.username:
            self.username = unique_slug(User, self.name or self.email.split("@")[0], field="username")
        super().save(*args, **kwargs)

    def __str__(self):
        return self.email


class Company(SoftDeleteModel):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=50, unique=True, blank=True)
    # Marks the sentinel tenant every new user is attached to.
    is_main = models.BooleanField(default=False, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SoftDeleteManager.from_queryset(CompanyQuerySet)()
    all_objects = models.Manager.from_queryset(CompanyQuerySet)()

    class Meta:
        verbose_name = _("Company")
        verbose_name_plural = _("Companies")
        constraints = [
            models.UniqueConstraint(
                fields=["is_main"],
                condition=Q(is_main=True),
                name="accounts_company_single_sentinel",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Company, self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class TargetKind(models.TextChoices):
    COMPANY = "company", _("Company")
    BRAND = "brand", _("Brand")
    PRODUCT = "product", _("Product")
    USER = "user", _("User")
    GRANT = "grant", _("Grant")


class GrantQuerySet(models.QuerySet):
    def live(self):
        return self.filter(revoked_at__isnull=True)

    def revoked(self):
        return self.filter(revoked_at__isnull=False)

    def for_user(self, user):
        return self.filter(user=user)

    def of_kind(self, kind):
        return self.filter(target_kind=kind)


class Grant(models.Model):
    """
    A single (user, target kind, target id) authorization record.

    Grants are the only thing that confers access to companies, brands and
    products. Revoking a grant stamps ``revoked_at``; purging removes the row.
    Liveness is always filtered explicitly, never through a default manager.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="grants",
    )
    target_kind = models.CharField(max_length=16, choices=TargetKind.choices)
    target_id = models.PositiveBigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    objects = GrantQuerySet.as_manager()

    class Meta:
        verbose_name = _("Grant")
        verbose_name_plural = _("Grants")
        indexes = [
            models.Index(fields=["user", "target_kind"], name="accounts_grant_user_kind"),
            models.Index(fields=["target_kind", "target_id"], name="accounts_grant_target"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "target_kind", "target_id"],
                condition=Q(revoked_at__isnull=True),
                name="accounts_grant_unique_live",
            ),
        ]

    @property
    def is_live(self) -> bool:
        return self.revoked_at is None

    def revoke(self):
        self.revoked_at = timezone.now()
        self.save(update_fields=["revoked_at"])

    def __str__(self):
        return f"{self.user_id} -> {self.target_kind}:{self.target_id}"
