from __future__ import annotations

import django_filters

from pharma_core.catalog.models import PriorityTier
from pharma_core.redistributions.models import RedistributionRequest, RedistributionStatus
from pharma_core.redistributions.selectors import filter_by_priority


class RedistributionFilter(django_filters.FilterSet):
    priority = django_filters.ChoiceFilter(choices=PriorityTier.choices, method="filter_priority")
    status = django_filters.ChoiceFilter(choices=RedistributionStatus.choices)
    origin = django_filters.UUIDFilter(field_name="origin_site_id")
    destination = django_filters.UUIDFilter(field_name="destination_site_id")
    medication = django_filters.UUIDFilter(field_name="medication_id")

    class Meta:
        model = RedistributionRequest
        fields = ["priority", "status", "origin", "destination", "medication"]

    def filter_priority(self, queryset, name, value):
        return filter_by_priority(queryset, value)
