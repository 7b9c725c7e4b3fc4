"""API views for supplier targets and incentives."""
from __future__ import annotations

import logging
from contextlib import contextmanager

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response

from api.v1.permissions import CanManageSupplierPerformance, CanViewSupplierPerformance
from core.export import rows_to_csv_response
from targets import services
from targets.exceptions import DuplicateRecord, RecordNotFound, TargetValidationError
from targets.models import SupplierIncentive, SupplierTarget
from targets.periods import PeriodFilter, daily_target, week_slot_ranges, working_days
from targets.progress import target_progress
from targets.revenue import aggregate_revenue
from targets.target_serializers import (
    SupplierIncentiveCreateSerializer,
    SupplierIncentiveSerializer,
    SupplierIncentiveUpdateSerializer,
    SupplierTargetCreateSerializer,
    SupplierTargetSerializer,
    SupplierTargetUpdateSerializer,
    TargetValidateSerializer,
)

logger = logging.getLogger(__name__)

SUPPLIER_ID_PATTERN = r"(?P<supplier_id>[^/.]+)"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A record already exists for this supplier and period."
    default_code = "conflict"


@contextmanager
def domain_errors():
    """Translate supplier performance errors into DRF responses."""
    try:
        yield
    except TargetValidationError as exc:
        raise serializers.ValidationError({exc.field or "non_field_errors": [exc.message]})
    except RecordNotFound as exc:
        raise NotFound(str(exc))
    except DuplicateRecord as exc:
        raise Conflict(str(exc))


def _int_param(request, name, *, required=False):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        if required:
            raise serializers.ValidationError({name: ["This query parameter is required."]})
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise serializers.ValidationError({name: ["A valid integer is required."]})


def _date_param(request, name):
    raw = request.query_params.get(name)
    if not raw:
        return None
    try:
        value = parse_date(raw)
    except ValueError:
        value = None
    if value is None:
        raise serializers.ValidationError({name: ["Use the YYYY-MM-DD format."]})
    return value


def _period_from_query(request) -> PeriodFilter:
    """year+month, year alone, start_date/end_date, or all-time when none is given."""
    year = _int_param(request, "year")
    month = _int_param(request, "month")
    if month is not None and year is None:
        raise serializers.ValidationError({"year": ["year is required when month is given."]})
    with domain_errors():
        if year is not None and month is not None:
            return PeriodFilter.for_month(year, month)
        if year is not None:
            return PeriodFilter.for_year(year)
        start = _date_param(request, "start_date")
        end = _date_param(request, "end_date")
        if start or end:
            return PeriodFilter.between(start, end)
    return PeriodFilter.all_time()


class _PerformanceViewSet(viewsets.ModelViewSet):
    """Write serializers run the services; responses always use the read serializer."""

    permission_classes = [CanManageSupplierPerformance]
    filterset_fields = ["supplier_company", "year", "month"]
    search_fields = ["supplier_company__name", "supplier_company__code"]
    ordering_fields = ["year", "month", "created_at"]

    read_serializer_class = None
    create_serializer_class = None
    update_serializer_class = None

    def get_serializer_class(self):
        if self.action == "create":
            return self.create_serializer_class
        if self.action in ("update", "partial_update"):
            return self.update_serializer_class
        return self.read_serializer_class

    def _read(self, instance, many=False):
        return self.read_serializer_class(instance, many=many, context=self.get_serializer_context())

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            instance = serializer.save()
        return Response(self._read(instance).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            instance = serializer.save()
        return Response(self._read(instance).data)


class SupplierTargetViewSet(_PerformanceViewSet):
    queryset = SupplierTarget.objects.select_related("supplier_company")
    read_serializer_class = SupplierTargetSerializer
    create_serializer_class = SupplierTargetCreateSerializer
    update_serializer_class = SupplierTargetUpdateSerializer
    ordering_fields = ["year", "month", "total_packs_target", "created_at"]

    def perform_destroy(self, instance):
        with domain_errors():
            services.delete_target(instance.pk)

    @action(detail=False, methods=["get"], url_path=f"supplier/{SUPPLIER_ID_PATTERN}")
    def supplier(self, request, supplier_id=None):
        with domain_errors():
            targets = services.targets_for_supplier(supplier_id)
        return Response(self._read(targets, many=True).data)

    @action(
        detail=False, methods=["get"], url_path="working-days",
        permission_classes=[CanViewSupplierPerformance],
    )
    def working_days_calendar(self, request):
        year = _int_param(request, "year", required=True)
        month = _int_param(request, "month", required=True)
        total = _int_param(request, "total")
        with domain_errors():
            days = working_days(year, month)
            data = {
                "year": year,
                "month": month,
                "working_days": [day._asdict() for day in days],
                "count": len(days),
                "week_slots": {slot: list(bounds) for slot, bounds in week_slot_ranges(year, month).items()},
            }
            if total is not None:
                data["total"] = total
                data["daily_target"] = daily_target(total, year, month)
        return Response(data)

    @action(
        detail=False, methods=["post"], url_path="validate",
        permission_classes=[CanViewSupplierPerformance],
    )
    def validate(self, request):
        serializer = TargetValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data
        with domain_errors():
            result = services.preview_target(
                payload["total_packs_target"],
                payload["weekly_targets"],
                payload.get("category_targets"),
            )
        data = result.as_dict()
        data.update(
            total_packs_target=result.total,
            is_reconciled=result.is_reconciled,
            mismatches=result.mismatches(),
            strict=services.reconciliation_is_strict(),
        )
        return Response(data)

    @action(detail=True, methods=["get"])
    def progress(self, request, pk=None):
        return Response(target_progress(self.get_object()))


class SupplierIncentiveViewSet(_PerformanceViewSet):
    queryset = SupplierIncentive.objects.select_related("supplier_company")
    read_serializer_class = SupplierIncentiveSerializer
    create_serializer_class = SupplierIncentiveCreateSerializer
    update_serializer_class = SupplierIncentiveUpdateSerializer

    def perform_destroy(self, instance):
        with domain_errors():
            services.delete_incentive(instance.pk)

    @action(detail=False, methods=["get"], url_path=f"supplier/{SUPPLIER_ID_PATTERN}")
    def supplier(self, request, supplier_id=None):
        year = _int_param(request, "year")
        month = _int_param(request, "month")
        with domain_errors():
            incentives = services.incentives_for_supplier(supplier_id, year=year, month=month)
        return Response(self._read(incentives, many=True).data)

    @action(detail=False, methods=["get"], url_path=f"revenue/{SUPPLIER_ID_PATTERN}")
    def revenue(self, request, supplier_id=None):
        year = _int_param(request, "year", required=True)
        month = _int_param(request, "month", required=True)
        with domain_errors():
            summary = aggregate_revenue(supplier_id, PeriodFilter.for_month(year, month))
        return Response({
            "supplier_company": supplier_id,
            "year": year,
            "month": month,
            "total_revenue": str(summary.total_revenue),
            "total_orders": summary.total_orders,
        })

    @action(detail=False, methods=["get"], url_path=f"monthly-revenue/{SUPPLIER_ID_PATTERN}")
    def monthly_revenue(self, request, supplier_id=None):
        period = _period_from_query(request)
        with domain_errors():
            summary = aggregate_revenue(supplier_id, period)
        data = summary.as_dict()
        data.update(supplier_company=supplier_id, period=str(period))
        return Response(data)

    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        year = _int_param(request, "year")
        month = _int_param(request, "month")
        incentives = self.filter_queryset(services.list_incentives(year=year, month=month))
        rows = [(incentive, services.build_incentive_report(incentive)) for incentive in incentives]

        def variance_pct(row):
            report = row[1]
            if not report.variance_percentage_defined:
                return "n/a"
            return report.variance_percentage

        currency = settings.CURRENCY
        columns = [
            (lambda row: row[0].supplier_company.name, "Supplier"),
            (lambda row: row[0].supplier_company.code, "Code"),
            (lambda row: row[0].period, "Period"),
            (lambda row: row[0].incentive_percentage, "Incentive %"),
            (lambda row: row[1].total_revenue, f"Revenue ({currency})"),
            (lambda row: row[1].total_orders, "Orders"),
            (lambda row: row[1].calculated_incentive, f"Calculated incentive ({currency})"),
            (lambda row: row[0].actual_incentive_paid, f"Actual paid ({currency})"),
            (lambda row: row[1].variance, f"Variance ({currency})"),
            (variance_pct, "Variance %"),
        ]
        suffix = f"{year}-{month:02d}" if year and month else timezone.localdate().isoformat()
        logger.info("Supplier incentive export: %d rows, period=%s", len(rows), suffix)
        return rows_to_csv_response(rows, columns, f"supplier-incentives-{suffix}")
