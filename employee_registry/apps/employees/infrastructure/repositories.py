from typing import Iterable, List, Optional

from django.db.models import Q

from employee_registry.apps.employees.domain.fields import EmploymentStatus
from employee_registry.apps.employees.domain.repositories import EmployeeRepository
from employee_registry.apps.employees.models import Employee


class EmployeeRepositoryImpl(EmployeeRepository):
    """
    Django ORM implementation of the employee repository.
    """
    def get_by_id(self, employee_id: int) -> Employee:
        return Employee.objects.get(pk=employee_id)

    def get_for_update(self, employee_id: int) -> Employee:
        return Employee.objects.select_for_update().get(pk=employee_id)

    def list_active(self) -> List[Employee]:
        return list(Employee.objects.exclude(employment_status=EmploymentStatus.TERMINATED))

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        qs = Employee.objects.filter(email__iexact=email)
        if exclude_id is not None:
            qs = qs.exclude(pk=exclude_id)
        return qs.exists()

    def find_ids_by_name(self, fragment: str, roles: Optional[Iterable[str]] = None) -> List[int]:
        qs = Employee.objects.filter(
            Q(first_name__icontains=fragment) | Q(last_name__icontains=fragment)
        )
        if roles is not None:
            qs = qs.filter(role__in=list(roles))
        return list(qs.values_list('id', flat=True))

    def add(self, employee: Employee) -> Employee:
        employee.save()
        return employee

    def save(self, employee: Employee, update_fields: Optional[Iterable[str]] = None) -> Employee:
        if update_fields is not None:
            employee.save(update_fields=list(update_fields))
        else:
            employee.save()
        return employee
