"""
Static role capability table.

Which fields each role may write, and how that set narrows when the actor
edits their own record.  Pure data: the decision logic lives in
``permissions.PermissionResolver``.
"""
from dataclasses import dataclass
from typing import FrozenSet

from .fields import ALL_FIELDS, EmployeeField, Role

ADMIN_ONLY_FIELDS = frozenset({
    EmployeeField.ROLE,
    EmployeeField.APPROVED,
})

MANAGER_SELF_RESTRICTED_FIELDS = frozenset({
    EmployeeField.OCCUPATION,
    EmployeeField.EMPLOYMENT_STATUS,
    EmployeeField.WORK_LOCATION,
})

EMPLOYEE_ALLOWED_FIELDS = frozenset({
    EmployeeField.EMERGENCY_CONTACT,
    EmployeeField.PROFILE_PHOTO,
    EmployeeField.RESUME,
    EmployeeField.ADDRESS,
    EmployeeField.EMAIL,
    EmployeeField.PASSWORD,
})


@dataclass(frozen=True)
class RoleCapability:
    writable: FrozenSet[EmployeeField]
    self_forbidden: FrozenSet[EmployeeField] = frozenset()
    may_edit_others: bool = True

    def writable_on(self, is_self: bool) -> FrozenSet[EmployeeField]:
        if is_self:
            return self.writable - self.self_forbidden
        if not self.may_edit_others:
            return frozenset()
        return self.writable


ROLE_CAPABILITIES = {
    Role.ADMIN: RoleCapability(writable=ALL_FIELDS),
    Role.MANAGER: RoleCapability(
        writable=ALL_FIELDS - ADMIN_ONLY_FIELDS,
        self_forbidden=MANAGER_SELF_RESTRICTED_FIELDS,
    ),
    Role.EMPLOYEE: RoleCapability(
        writable=EMPLOYEE_ALLOWED_FIELDS,
        may_edit_others=False,
    ),
}


def capability_for(role) -> RoleCapability:
    return ROLE_CAPABILITIES[Role(role)]


def ordered(fields) -> list:
    """Field values in declaration order, for stable client-facing lists."""
    return [f.value for f in EmployeeField if f in fields]
