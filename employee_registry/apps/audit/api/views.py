"""
Read-only views over the audit trail.

- GET /admin/manager-logs/ - manager log (Admin)
- GET /admin/employee-update-logs/ - self log (Admin, Manager)
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from employee_registry.apps.audit.application.queries import manager_log, self_log
from employee_registry.apps.common.drf_permissions import IsAdmin, IsManagerOrAdmin

from .serializers import AuditEntrySerializer

COMMON_PARAMETERS = [
    OpenApiParameter(name='from', type=OpenApiTypes.DATETIME, location=OpenApiParameter.QUERY,
                     description='Entries at or after this instant'),
    OpenApiParameter(name='to', type=OpenApiTypes.DATETIME, location=OpenApiParameter.QUERY,
                     description='Entries at or before this instant; a bare date covers the whole day'),
    OpenApiParameter(name='field', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                     description='Only entries that changed this field'),
]


class AuditLogView(APIView):
    engine = None

    def get(self, request):
        result = self.engine.query(request.query_params)
        return Response({
            'count': result.count,
            'logs': AuditEntrySerializer(result.entries, many=True).data,
        })


class ManagerLogView(AuditLogView):
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    engine = manager_log

    @extend_schema(parameters=[
        OpenApiParameter(name='manager', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                         description='Part of the first or last name of the Manager or Admin who made the change'),
        OpenApiParameter(name='action', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY),
        *COMMON_PARAMETERS,
    ])
    def get(self, request):
        return super().get(request)


class EmployeeUpdateLogView(AuditLogView):
    permission_classes = [permissions.IsAuthenticated, IsManagerOrAdmin]
    engine = self_log

    @extend_schema(parameters=[
        OpenApiParameter(name='employee', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                         description='Part of the first or last name of the employee'),
        *COMMON_PARAMETERS,
    ])
    def get(self, request):
        return super().get(request)
