"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1 import views as v1_views

router = DefaultRouter()
router.register(r"customers", v1_views.CustomerViewSet, basename="customer")

app_name = "api"
urlpatterns = [
    path("", include(router.urls)),

    # Auth endpoints
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # Dashboards
    path("dashboards/admin/", v1_views.AdminDashboardAPIView.as_view(), name="dashboard-admin"),
    path("dashboards/manager/", v1_views.ManagerDashboardAPIView.as_view(), name="dashboard-manager"),
    path(
        "dashboards/salesperson/",
        v1_views.SalespersonDashboardAPIView.as_view(),
        name="dashboard-salesperson",
    ),

    # Reports
    path(
        "reports/converted-revenue/",
        v1_views.ConvertedRevenueAPIView.as_view(),
        name="report-converted-revenue",
    ),
    path("reports/overview/", v1_views.ReportsOverviewAPIView.as_view(), name="report-overview"),
    path(
        "reports/breakdowns/export/",
        v1_views.BreakdownExportAPIView.as_view(),
        name="report-breakdown-export",
    ),
]
