from rest_framework import serializers

from .models import Company, User


class CompanySerializer(serializers.ModelSerializer):
    class Meta:
        model = Company
        fields = ("id", "name", "slug", "is_main", "created_at", "updated_at", "deleted_at")
        # is_main is editable=False on the model, so it is read-only here too.
        read_only_fields = ("slug", "created_at", "updated_at", "deleted_at")


class UserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(min_length=8, write_only=True, required=False)

    class Meta:
        model = User
        fields = ("id", "email", "name", "username", "password", "is_active", "date_joined", "deleted_at")
        read_only_fields = ("username", "is_active", "date_joined", "deleted_at")

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "This field is required."})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        if password:
            instance.set_password(password)
        return super().update(instance, validated_data)


class GrantSummarySerializer(serializers.Serializer):
    companies = serializers.ListField(child=serializers.IntegerField())
    brands = serializers.ListField(child=serializers.IntegerField())
    products = serializers.ListField(child=serializers.IntegerField())
    has_company_access = serializers.BooleanField()


class MeSerializer(serializers.Serializer):
    user = UserSerializer()
    grants = GrantSummarySerializer()

    @classmethod
    def from_actor(cls, actor):
        return cls(
            instance={
                "user": actor.user,
                "grants": {
                    "companies": sorted(actor.company_ids),
                    "brands": sorted(actor.brand_ids),
                    "products": sorted(actor.product_ids),
                    "has_company_access": bool(actor.company_ids),
                },
            }
        )

