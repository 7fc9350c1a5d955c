from rest_framework import serializers

from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.employees.api.serializers import EmployeeSummarySerializer


class AuditEntrySerializer(serializers.ModelSerializer):
    """
    Serializer for AuditEntry.  Actor and target are embedded as display
    identities so log readers do not need a second lookup.
    """
    actor = EmployeeSummarySerializer(read_only=True)
    target = EmployeeSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = AuditEntry
        fields = ('id', 'kind', 'actor', 'target', 'action', 'changes', 'timestamp')
        read_only_fields = fields
