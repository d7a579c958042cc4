"""Serializers for the read-only customer endpoints."""
from rest_framework import serializers

from analytics.kpis import is_open_opportunity
from analytics.pipeline import customer_pipeline_value
from core.formatting import format_inr
from customers.models import Customer
from customers.services import customer_record


class CustomerSerializer(serializers.ModelSerializer):
    """Customer row with its pipeline valuation attached."""

    assigned_showroom_name = serializers.CharField(source="assigned_showroom.name", read_only=True, default=None)
    assigned_salesperson_name = serializers.SerializerMethodField()
    pipeline_value = serializers.SerializerMethodField()
    pipeline_value_display = serializers.SerializerMethodField()
    is_open_opportunity = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            "id",
            "full_name",
            "phone_number",
            "email",
            "lead_status",
            "lead_source",
            "interest_level",
            "interest_categories_json",
            "purchase_amount",
            "follow_up_date",
            "assigned_showroom",
            "assigned_showroom_name",
            "assigned_salesperson",
            "assigned_salesperson_name",
            "pipeline_value",
            "pipeline_value_display",
            "is_open_opportunity",
            "created_at",
        ]
        read_only_fields = fields

    def _record(self, obj):
        cache = self.context.setdefault("_records", {})
        if obj.pk not in cache:
            cache[obj.pk] = customer_record(obj)
        return cache[obj.pk]

    def get_assigned_salesperson_name(self, obj) -> str | None:
        if obj.assigned_salesperson_id is None:
            return None
        u = obj.assigned_salesperson
        return u.get_full_name() or u.email

    def get_pipeline_value(self, obj) -> str:
        return f"{customer_pipeline_value(self._record(obj)):.2f}"

    def get_pipeline_value_display(self, obj) -> str:
        return format_inr(customer_pipeline_value(self._record(obj)))

    def get_is_open_opportunity(self, obj) -> bool:
        return is_open_opportunity(self._record(obj))


class PriceRangeSerializer(serializers.Serializer):
    label = serializers.CharField()
    low = serializers.DecimalField(max_digits=16, decimal_places=2)
    high = serializers.DecimalField(max_digits=16, decimal_places=2, allow_null=True)
    estimate = serializers.DecimalField(max_digits=16, decimal_places=2)
