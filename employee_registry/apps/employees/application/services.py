"""
Application service for employee records.

``update_employee`` is the authorized-update path:

    load target (locked) -> resolve permission -> validate values
    -> diff -> apply -> save record -> record audit entry

Record save and audit write share one transaction, so a failing audit write
leaves the record untouched and the caller gets a ``PersistenceError``.
"""
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import DatabaseError, transaction

from employee_registry.apps.audit.domain.recorder import AuditRecorder
from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.common.exceptions import (
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from employee_registry.apps.employees.api.serializers import RegisterSerializer, clean_update
from employee_registry.apps.employees.domain.diff import ChangeDiffer
from employee_registry.apps.employees.domain.fields import EmployeeField, EmploymentStatus, Role
from employee_registry.apps.employees.domain.payload import parse_update
from employee_registry.apps.employees.domain.permissions import Allowed, Forbidden, PermissionResolver
from employee_registry.apps.employees.domain.repositories import EmployeeRepository
from employee_registry.apps.employees.domain.value_objects import Actor
from employee_registry.apps.employees.infrastructure.repositories import EmployeeRepositoryImpl
from employee_registry.apps.employees.models import Employee
from employee_registry.apps.employees.validators import validated_or_raise

logger = logging.getLogger(__name__)

UPLOAD_TYPES = {
    'resume': EmployeeField.RESUME,
    'profile': EmployeeField.PROFILE_PHOTO,
}


@dataclass
class UpdateOutcome:
    employee: Employee
    changes: Dict[str, dict] = field(default_factory=dict)
    audit_entry: Optional[AuditEntry] = None


class EmployeeApplicationService:
    def __init__(
        self,
        employee_repository: EmployeeRepository = None,
        resolver: PermissionResolver = None,
        differ: ChangeDiffer = None,
        recorder: AuditRecorder = None,
        storage=None,
    ):
        self.employee_repository = employee_repository or EmployeeRepositoryImpl()
        self.resolver = resolver or PermissionResolver()
        self.differ = differ or ChangeDiffer()
        self.recorder = recorder or AuditRecorder()
        self.storage = storage or default_storage

    def _get(self, employee_id, for_update=False) -> Employee:
        try:
            if for_update:
                return self.employee_repository.get_for_update(employee_id)
            return self.employee_repository.get_by_id(employee_id)
        except (Employee.DoesNotExist, ValueError, TypeError):
            raise NotFoundError()

    def get_employee(self, employee_id) -> Employee:
        return self._get(employee_id)

    def list_employees(self):
        return self.employee_repository.list_active()

    def register_employee(self, data: Mapping[str, Any]) -> Employee:
        """
        Self-registration.  New accounts always start as unapproved Employees;
        ``role``, ``approved`` and ``employmentStatus`` in the payload are ignored.
        """
        values = dict(validated_or_raise(RegisterSerializer(data=data), 'Invalid registration details'))
        if self.employee_repository.email_taken(values['email']):
            raise ValidationError('Employee already exists')

        password = values.pop('password')
        employee = Employee(role=Role.EMPLOYEE, approved=False, **values)
        employee.set_password(password)

        try:
            self.employee_repository.add(employee)
        except DatabaseError:
            logger.exception(f"Failed to register employee {employee.email}")
            raise PersistenceError()

        logger.info(f"Registered employee {employee.pk} ({employee.email}), awaiting approval")
        return employee


    def update_employee(self, actor: Actor, employee_id, payload: Mapping[str, Any]) -> UpdateOutcome:
        try:
            with transaction.atomic():
                employee = self._get(employee_id, for_update=True)
                update = parse_update(payload, employee)

                decision = self.resolver.resolve(actor, employee.pk, update.fields.keys())
                if not isinstance(decision, Allowed):
                    self._reject(actor, employee, decision)
                update.raise_for_problems()

                cleaned = clean_update(update.fields)
                email = cleaned.get(EmployeeField.EMAIL)
                if email and self.employee_repository.email_taken(email, exclude_id=employee.pk):
                    raise ValidationError('Email is already in use')

                result = self.differ.diff(employee, cleaned)
                result.apply_to(employee)
                self.employee_repository.save(employee)

                entry = self.recorder.record(actor, employee, result.changes)
        except DatabaseError:
            logger.exception(f"Failed to persist update of employee {employee_id} by {actor.id}")
            raise PersistenceError()

        return UpdateOutcome(employee=employee, changes=result.changes_payload(), audit_entry=entry)

    def _reject(self, actor: Actor, employee: Employee, decision):
        if isinstance(decision, Forbidden):
            logger.warning(f"Employee {actor.id} tried to update employee {employee.pk}")
            raise AuthorizationError(decision.message)
        logger.warning(
            f"{actor.role} {actor.id} refused on employee {employee.pk}: "
            f"{', '.join(decision.forbidden_fields)}"
        )
        raise AuthorizationError(decision.message, **{decision.universe_key: decision.allowed_universe})

    def attach_document(self, actor: Actor, employee_id, upload_type: str, uploaded_file) -> UpdateOutcome:
        """
        Store an uploaded resume or profile photo and point the record at it.

        The stored path goes through ``update_employee``, so it is checked and
        audited like any other field write.
        """
        employee_field = UPLOAD_TYPES.get(upload_type)
        if employee_field is None:
            raise ValidationError('Invalid upload type')

        employee = self._get(employee_id)
        decision = self.resolver.resolve(actor, employee.pk, [employee_field])
        if not isinstance(decision, Allowed):
            self._reject(actor, employee, decision)

        if not uploaded_file or not uploaded_file.size:
            raise ValidationError('File not uploaded')
        stem, ext = os.path.splitext(os.path.basename(uploaded_file.name))
        allowed = settings.EMPLOYEE_REGISTRY['UPLOAD_ALLOWED_EXTENSIONS']
        if ext.lower().lstrip('.') not in allowed:
            raise ValidationError(f"Unsupported file type. Allowed: {', '.join(allowed)}")

        name = f"{settings.EMPLOYEE_REGISTRY['UPLOAD_DIR']}/{stem}-{int(time.time() * 1000)}{ext.lower()}"
        path = self.storage.save(name, uploaded_file)
        try:
            return self.update_employee(actor, employee.pk, {employee_field.value: path})
        except Exception:
            self.storage.delete(path)
            raise

    def terminate_employee(self, employee_id) -> Employee:
        """Soft delete: the record and its audit history stay."""
        with transaction.atomic():
            employee = self._get(employee_id, for_update=True)
            employee.employment_status = EmploymentStatus.TERMINATED
            self.employee_repository.save(employee, update_fields=['employment_status', 'updated_at'])
        logger.info(f"Employee {employee.pk} marked as terminated")
        return employee

    def approve_employee(self, employee_id) -> Employee:
        with transaction.atomic():
            employee = self._get(employee_id, for_update=True)
            employee.approved = True
            self.employee_repository.save(employee, update_fields=['approved', 'updated_at'])
        logger.info(f"Employee {employee.pk} approved")
        return employee
