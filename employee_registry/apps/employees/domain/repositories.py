from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from employee_registry.apps.employees.models import Employee


class EmployeeRepository(ABC):
    """
    Abstract repository for employee records.
    Services depend on this contract, not on the ORM.
    """
    @abstractmethod
    def get_by_id(self, employee_id: int) -> Employee:
        pass

    @abstractmethod
    def get_for_update(self, employee_id: int) -> Employee:
        """Load a record and lock it for the rest of the current transaction."""
        pass

    @abstractmethod
    def list_active(self) -> List[Employee]:
        pass

    @abstractmethod
    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    def find_ids_by_name(self, fragment: str, roles: Optional[Iterable[str]] = None) -> List[int]:
        pass

    @abstractmethod
    def add(self, employee: Employee) -> Employee:
        pass

    @abstractmethod
    def save(self, employee: Employee, update_fields: Optional[Iterable[str]] = None) -> Employee:
        pass
