from __future__ import annotations

import django_filters

from pharma_core.alerts.models import Alert, AlertType
from pharma_core.catalog.models import PriorityTier


class AlertFilter(django_filters.FilterSet):
    site = django_filters.UUIDFilter(field_name="site_id")
    medication = django_filters.UUIDFilter(field_name="medication_id")
    alert_type = django_filters.ChoiceFilter(choices=AlertType.choices)
    priority_tier = django_filters.ChoiceFilter(choices=PriorityTier.choices)
    generated_from = django_filters.DateFilter(field_name="generated_at", lookup_expr="date__gte")
    generated_to = django_filters.DateFilter(field_name="generated_at", lookup_expr="date__lte")

    class Meta:
        model = Alert
        fields = ["site", "medication", "alert_type", "priority_tier"]
