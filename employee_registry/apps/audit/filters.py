"""
Filterset definitions for the audit log queries.

Uses ``django_filters`` to turn query parameters into the storage-level part
of a log query: actor name, action label and timestamp range.  Filtering by
changed field is done afterwards in ``application.queries`` because the keys
of ``changes`` are not indexed.
"""
import re
from datetime import timedelta

import django_filters

from employee_registry.apps.audit.domain.recorder import MANAGER_LOG_AUTHORS
from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.employees.infrastructure.repositories import EmployeeRepositoryImpl

DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class AuditEntryFilter(django_filters.FilterSet):
    """
    Common filters of both logs.  ``from`` and ``to`` are Python keywords, so
    they are declared as ``date_from`` / ``date_to`` and renamed in
    ``get_filters``.
    """
    date_from = django_filters.DateTimeFilter(field_name='timestamp', lookup_expr='gte')
    date_to = django_filters.DateTimeFilter(field_name='timestamp', method='filter_date_to')

    renamed_params = {'date_from': 'from', 'date_to': 'to'}
    actor_roles = None

    class Meta:
        model = AuditEntry
        fields = []

    @classmethod
    def get_filters(cls):
        filters = super().get_filters()
        for attr, param in cls.renamed_params.items():
            if attr in filters:
                filters[param] = filters.pop(attr)
        return filters

    def filter_date_to(self, queryset, name, value):
        # A bare date means "until the end of that day"
        raw = str(self.data.get('to', '')).strip()
        if DATE_ONLY.match(raw):
            return queryset.filter(**{f'{name}__lt': value + timedelta(days=1)})
        return queryset.filter(**{f'{name}__lte': value})

    def filter_actor_name(self, queryset, name, value):
        ids = EmployeeRepositoryImpl().find_ids_by_name(value.strip(), roles=self.actor_roles)
        return queryset.filter(actor_id__in=ids)


class ManagerLogFilter(AuditEntryFilter):
    manager = django_filters.CharFilter(method='filter_actor_name')
    action = django_filters.CharFilter(field_name='action', lookup_expr='icontains')

    actor_roles = tuple(MANAGER_LOG_AUTHORS)

    class Meta(AuditEntryFilter.Meta):
        pass


class SelfLogFilter(AuditEntryFilter):
    employee = django_filters.CharFilter(method='filter_actor_name')

    class Meta(AuditEntryFilter.Meta):
        pass
