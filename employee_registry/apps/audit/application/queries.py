"""
Read side of the audit trail.

Each log (manager / self) gets a ``LogQueryEngine`` bound to its filterset.
A query runs in three steps: the filterset resolves the actor name to
employee ids and narrows by action and timestamp in the database, entries
come back newest first with actor and target joined, and finally the
``field`` parameter keeps only entries whose ``changes`` name that field.
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Type

from django_filters import FilterSet

from employee_registry.apps.audit.filters import ManagerLogFilter, SelfLogFilter
from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.common.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogQueryResult:
    count: int
    entries: List[AuditEntry]


class LogQueryEngine:

    def __init__(self, kind: str, filterset_class: Type[FilterSet]):
        self.kind = kind
        self.filterset_class = filterset_class

    def base_queryset(self):
        return (
            AuditEntry.objects.filter(kind=self.kind)
            .select_related('actor', 'target')
            .order_by('-timestamp', '-id')
        )

    def query(self, params: Mapping[str, Any]) -> LogQueryResult:
        filterset = self.filterset_class(data=params, queryset=self.base_queryset())
        if not filterset.is_valid():
            errors = {name: [str(message) for message in messages] for name, messages in filterset.errors.items()}
            raise ValidationError('Invalid log query parameters', errors=errors)

        entries = list(filterset.qs)

        changed_field = str(params.get('field') or '').strip()
        if changed_field:
            entries = [
                entry for entry in entries
                if isinstance(entry.changes, dict) and changed_field in entry.changes
            ]

        logger.debug(f"{self.kind} log query {dict(params)} matched {len(entries)} entries")
        return LogQueryResult(count=len(entries), entries=entries)


manager_log = LogQueryEngine(AuditEntry.Kind.MANAGER, ManagerLogFilter)
self_log = LogQueryEngine(AuditEntry.Kind.SELF, SelfLogFilter)
