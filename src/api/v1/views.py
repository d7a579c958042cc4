"""API v1 views: dashboards, reports and read-only customers."""
import logging

from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from analytics.price_ranges import PRICE_RANGE_BUCKETS, default_parser
from api.v1.pagination import StandardResultsSetPagination
from api.v1.permissions import IsActiveStaff, IsAdmin, IsManagerOrAdmin
from api.v1.serializers import CustomerSerializer, PriceRangeSerializer
from core.export import rows_to_csv_response, rows_to_xlsx_response
from customers.models import Customer
from customers.services import scoped_customers
from reports import services as report_services

logger = logging.getLogger("jewelcrm")

FETCH_FAILED = {"detail": "Failed to load dashboard data.", "retryable": True}


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------

class _ReportAPIView(APIView):
    """GET wrapper turning database failures into a retryable 503."""

    permission_classes = [IsAuthenticated, IsActiveStaff]
    report_name = "report"

    def build(self, request):
        raise NotImplementedError

    def get(self, request):
        try:
            return self.build(request)
        except DatabaseError:
            logger.exception("Failed to build %s for %s", self.report_name, request.user)
            return Response(FETCH_FAILED, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class AdminDashboardAPIView(_ReportAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    report_name = "admin dashboard"

    def build(self, request):
        return Response(report_services.build_admin_dashboard(request.user))


class ManagerDashboardAPIView(_ReportAPIView):
    permission_classes = [IsAuthenticated, IsManagerOrAdmin]
    report_name = "manager dashboard"

    def build(self, request):
        return Response(report_services.build_manager_dashboard(request.user))


class SalespersonDashboardAPIView(_ReportAPIView):
    report_name = "salesperson dashboard"

    def build(self, request):
        return Response(report_services.build_salesperson_dashboard(request.user))


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class ConvertedRevenueAPIView(_ReportAPIView):
    """Converted revenue, current period to date vs the previous period."""

    permission_classes = [IsAuthenticated, IsAdmin]
    report_name = "converted revenue comparison"

    def build(self, request):
        period = request.query_params.get("period", "YTD")
        try:
            payload = report_services.build_converted_revenue_comparison(request.user, period)
        except ValueError:
            return Response(
                {"detail": "Invalid period. Use WTD, MTD or YTD."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(payload)


class ReportsOverviewAPIView(_ReportAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    report_name = "reports overview"

    def build(self, request):
        return Response(report_services.build_reports_overview(request.user))


class BreakdownExportAPIView(_ReportAPIView):
    """Download a breakdown as CSV or Excel.

    Query params: ``report`` (lead_sources, category_conversion,
    walkout_reasons) and ``format`` (csv, xlsx; default csv).
    """

    permission_classes = [IsAuthenticated, IsManagerOrAdmin]
    report_name = "breakdown export"

    def build(self, request):
        report = request.query_params.get("report", "")
        export_format = (request.query_params.get("format") or "csv").lower()
        if report not in report_services.BREAKDOWN_REPORTS:
            return Response(
                {"detail": f"Unknown report. Use one of: {', '.join(report_services.BREAKDOWN_REPORTS)}."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if export_format not in ("csv", "xlsx"):
            return Response(
                {"detail": "Invalid format. Use csv or xlsx."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        title, columns = report_services.BREAKDOWN_REPORTS[report]
        rows = report_services.breakdown_rows(request.user, report)
        filename = f"{report}_breakdown"
        if export_format == "xlsx":
            return rows_to_xlsx_response(rows, columns, filename, sheet_title=title)
        return rows_to_csv_response(rows, columns, filename)


# ---------------------------------------------------------------------------
# Customers (read-only)
# ---------------------------------------------------------------------------

class CustomerViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Customers visible to the requesting user, with pipeline valuation.

    Search by name, phone and email.
    """

    serializer_class = CustomerSerializer
    queryset = Customer.objects.all()
    permission_classes = [IsAuthenticated, IsActiveStaff]
    pagination_class = StandardResultsSetPagination
    filterset_fields = ["lead_status", "lead_source", "assigned_showroom"]
    search_fields = ["full_name", "phone_number", "email"]
    ordering_fields = ["full_name", "created_at", "follow_up_date", "purchase_amount"]
    ordering = ["-created_at"]

    def get_queryset(self):
        return scoped_customers(self.request.user).select_related(
            "assigned_showroom", "assigned_salesperson"
        )

    @action(detail=False, methods=["get"], url_path="price-ranges", pagination_class=None)
    def price_ranges(self, request):
        """The price-range vocabulary with each bucket's bounds and estimate."""
        rows = []
        for label in PRICE_RANGE_BUCKETS:
            low, high = default_parser.bounds(label)
            rows.append({"label": label, "low": low, "high": high, "estimate": default_parser.estimate(label)})
        return Response(PriceRangeSerializer(rows, many=True).data)
