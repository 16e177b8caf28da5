from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import Company, Grant, User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password", "name", "username")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined", "deleted_at")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "password1", "password2")}),
    )
    readonly_fields = ("username", "deleted_at")
    list_display = ("email", "name", "is_staff", "deleted_at")
    search_fields = ("email", "name", "username")
    ordering = ("email",)


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_main", "deleted_at")
    search_fields = ("name", "slug")
    readonly_fields = ("is_main", "deleted_at")

    def get_queryset(self, request):
        return Company.all_objects.all()

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_main:
            return False
        return super().has_delete_permission(request, obj)


@admin.register(Grant)
class GrantAdmin(admin.ModelAdmin):
    """Grants are issued here or by provisioning; there is no grant API."""

    list_display = ("user", "target_kind", "target_id", "created_at", "revoked_at")
    list_filter = ("target_kind", ("revoked_at", admin.EmptyFieldListFilter))
    search_fields = ("user__email",)
    raw_id_fields = ("user",)
    actions = ("revoke_selected",)

    @admin.action(description="Revoke selected grants")
    def revoke_selected(self, request, queryset):
        from accounts import grants

        revoked = sum(grants.revoke(pk) for pk in queryset.live().values_list("pk", flat=True))
        self.message_user(request, f"Revoked {revoked} grant(s).")
