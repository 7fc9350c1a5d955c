"""
API views for employee records.

Endpoints:
- POST /employees/register/ - self-registration
- POST /employees/login/ - JWT pair (see urls.py)
- GET /employees/ - list of non-terminated employees (Admin)
- GET /employees/{id}/ - one employee
- PUT/PATCH /employees/{id}/ - authorized update
- PUT /employees/{id}/approve/ - approval (Manager, Admin)
- DELETE /employees/{id}/ - soft delete (Admin)
- POST /employees/{id}/upload/?type=resume|profile - document upload
"""
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from employee_registry.apps.common.drf_permissions import IsAdmin, IsManagerOrAdmin
from employee_registry.apps.common.jwt_serializers import employee_summary, get_tokens_for_employee
from employee_registry.apps.employees.application.services import EmployeeApplicationService
from employee_registry.apps.employees.domain.value_objects import Actor
from employee_registry.apps.employees.models import Employee

from .serializers import EmployeeSerializer, RegisterSerializer, UploadSerializer


class EmployeeViewSet(viewsets.GenericViewSet):
    queryset = Employee.objects.all()
    serializer_class = EmployeeSerializer
    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = EmployeeApplicationService()

    def get_permissions(self):
        if self.action == 'register':
            self.permission_classes = [permissions.AllowAny]
        elif self.action in ['list', 'destroy']:
            self.permission_classes = [permissions.IsAuthenticated, IsAdmin]
        elif self.action == 'approve':
            self.permission_classes = [permissions.IsAuthenticated, IsManagerOrAdmin]
        else:
            self.permission_classes = [permissions.IsAuthenticated]
        return super().get_permissions()

    def list(self, request):
        employees = self.service.list_employees()
        return Response(EmployeeSerializer(employees, many=True).data)

    def retrieve(self, request, pk=None):
        employee = self.service.get_employee(pk)
        return Response(EmployeeSerializer(employee).data)

    def update(self, request, pk=None):
        outcome = self.service.update_employee(Actor.from_user(request.user), pk, request.data)
        return Response({
            'message': 'Employee updated successfully',
            'employee': EmployeeSerializer(outcome.employee).data,
            'changes': outcome.changes,
        })

    def partial_update(self, request, pk=None):
        return self.update(request, pk)

    def destroy(self, request, pk=None):
        self.service.terminate_employee(pk)
        return Response({'message': 'Employee marked as terminated (soft deleted).'})

    @extend_schema(request=RegisterSerializer)
    @action(detail=False, methods=['post'])
    def register(self, request):
        employee = self.service.register_employee(request.data)
        tokens = get_tokens_for_employee(employee)
        return Response(
            {
                'message': 'Employee registered successfully. Awaiting approval.',
                'employee': employee_summary(employee),
                **tokens,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=None)
    @action(detail=True, methods=['put'])
    def approve(self, request, pk=None):
        employee = self.service.approve_employee(pk)
        return Response({
            'message': 'Employee approved successfully',
            'employee': EmployeeSerializer(employee).data,
        })

    @extend_schema(
        request={'multipart/form-data': UploadSerializer},
        parameters=[
            OpenApiParameter(
                name='type',
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                enum=['resume', 'profile'],
            )
        ],
    )
    @action(detail=True, methods=['post'], parser_classes=[MultiPartParser, FormParser])
    def upload(self, request, pk=None):
        outcome = self.service.attach_document(
            Actor.from_user(request.user),
            pk,
            request.query_params.get('type'),
            request.FILES.get('file'),
        )
        return Response({
            'message': 'File uploaded successfully',
            'employee': EmployeeSerializer(outcome.employee).data,
            'changes': outcome.changes,
        })
