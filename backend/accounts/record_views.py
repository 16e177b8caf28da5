"""
Generic views for soft-deletable, policy-gated resources.

Every concrete resource view subclasses one of these and sets ``model`` and
``serializer_class``. Routing convention:

    <resource>/                 GET list, POST create
    <resource>/<key>/           GET, PUT/PATCH, DELETE (soft delete)
    <resource>/<pk>/restore/    POST
    <resource>/<pk>/force/      DELETE (purge)
    <resource>/statistics/      GET scoped counts

Targets are looked up before the policy runs, so a missing record is a 404
and a forbidden one a 403. Restore and purge resolve trashed rows too.
"""

from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts import records
from accounts.authz import resolve_actor


class RecordViewMixin:
    model = None
    # Detail routes try this field first, then the primary key.
    lookup_field = "slug"
    lookup_url_kwarg = "key"

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.actor = resolve_actor(request)

    def get_queryset(self):
        return self.model.objects.all()

    def find(self, queryset, value):
        obj = None
        if self.lookup_field:
            obj = queryset.filter(**{self.lookup_field: value}).order_by("pk").first()
        if obj is None and str(value).isdigit():
            obj = queryset.filter(pk=int(value)).first()
        if obj is None:
            raise NotFound(f"{self.model._meta.verbose_name} not found.")
        return obj

    def get_object(self):
        return self.find(self.get_queryset(), self.kwargs[self.lookup_url_kwarg])


class RecordListCreateView(RecordViewMixin, generics.GenericAPIView):
    """GET scoped, searchable, sortable, paginated list; POST create."""

    def filter_listing(self, queryset):
        """Hook for resource-specific query parameters."""
        return queryset

    def get(self, request, *args, **kwargs):
        params = request.query_params
        queryset = records.list_records(
            self.get_queryset(),
            self.actor,
            search=params.get("q"),
            sort=params.get("sort"),
            direction=params.get("direction", "asc"),
        )
        queryset = self.filter_listing(queryset)
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        obj = records.create_record(self.actor, serializer)
        return Response(self.get_serializer(obj).data, status=status.HTTP_201_CREATED)


class RecordListView(RecordListCreateView):
    """Read-only listing (nested collections)."""

    http_method_names = ["get", "head", "options"]


class RecordDetailView(RecordViewMixin, generics.GenericAPIView):
    def get(self, request, *args, **kwargs):
        obj = self.get_object()
        records.authorize(self.actor, "view", self.model, obj)
        return Response(self.get_serializer(obj).data)

    def put(self, request, *args, **kwargs):
        return self._update(request, partial=False)

    def patch(self, request, *args, **kwargs):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        obj = self.get_object()
        serializer = self.get_serializer(obj, data=request.data, partial=partial)
        obj = records.update_record(self.actor, serializer)
        return Response(self.get_serializer(obj).data)

    def delete(self, request, *args, **kwargs):
        records.delete_record(self.actor, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)


class TrashedLookupMixin(RecordViewMixin):
    lookup_field = None
    lookup_url_kwarg = "pk"

    def get_queryset(self):
        return self.model.all_objects.all()


class RecordRestoreView(TrashedLookupMixin, generics.GenericAPIView):
    def post(self, request, *args, **kwargs):
        obj = records.restore_record(self.actor, self.get_object())
        return Response(self.get_serializer(obj).data)


class RecordForceDeleteView(TrashedLookupMixin, generics.GenericAPIView):
    def delete(self, request, *args, **kwargs):
        records.force_delete_record(self.actor, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecordActivationView(RecordViewMixin, generics.GenericAPIView):
    """POST turns sign-in on (``active = True``) or off for one record."""

    active = True

    def post(self, request, *args, **kwargs):
        obj = records.set_active(self.actor, self.get_object(), self.active)
        return Response(self.get_serializer(obj).data)


class RecordStatisticsView(APIView):
    model = None

    def get(self, request):
        actor = resolve_actor(request)
        return Response(records.statistics(self.model, actor))
