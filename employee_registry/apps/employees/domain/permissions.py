"""
Field-level authorization for employee record updates.

``PermissionResolver.resolve`` inspects who is acting, whose record is
targeted and which fields are proposed, and returns one of three decisions:

* ``Allowed``   - every proposed field may be written; the update proceeds.
* ``Rejected``  - at least one field is outside the actor's capability; the
  whole update is refused and the decision names the offending fields and
  the set the violated rule protects or permits.
* ``Forbidden`` - an Employee is targeting someone else's record.

Rules are evaluated in a fixed order and the first one violated wins:

1. employees may only edit their own record (no field inspection);
2. only admins may write ``role`` / ``approved``;
3. managers may not write their own occupation, status or work location;
4. employees may only write their self-service allowlist.
"""
import enum
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Union

from .capabilities import (
    ADMIN_ONLY_FIELDS,
    MANAGER_SELF_RESTRICTED_FIELDS,
    capability_for,
    ordered,
)
from .fields import EmployeeField, Role
from .value_objects import Actor


class RejectionRule(enum.Enum):
    ADMIN_ONLY = 'admin_only'
    MANAGER_SELF = 'manager_self'
    EMPLOYEE_ALLOWLIST = 'employee_allowlist'


@dataclass(frozen=True)
class Allowed:
    fields: FrozenSet[EmployeeField]


@dataclass(frozen=True)
class Rejected:
    rule: RejectionRule
    forbidden_fields: List[str]
    allowed_universe: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        joined = ', '.join(self.forbidden_fields)
        if self.rule is RejectionRule.ADMIN_ONLY:
            return f"Only Admin can update: {joined}"
        if self.rule is RejectionRule.MANAGER_SELF:
            return f"Managers cannot update their own admin-level field(s): {joined}"
        return f"You cannot update: {joined}"

    @property
    def universe_key(self) -> str:
        if self.rule is RejectionRule.EMPLOYEE_ALLOWLIST:
            return 'allowedFields'
        return 'allowedOnlyByAdmin'


@dataclass(frozen=True)
class Forbidden:
    message: str = 'You can only update your own profile'


Decision = Union[Allowed, Rejected, Forbidden]


class PermissionResolver:

    def resolve(self, actor: Actor, target_id, proposed: Iterable[EmployeeField]) -> Decision:
        proposed = list(dict.fromkeys(EmployeeField(f) for f in proposed))
        is_self = actor.is_self(target_id)

        if actor.role == Role.EMPLOYEE and not is_self:
            return Forbidden()

        if actor.role != Role.ADMIN:
            rejected = self._reject_any(proposed, ADMIN_ONLY_FIELDS, RejectionRule.ADMIN_ONLY, ADMIN_ONLY_FIELDS)
            if rejected:
                return rejected

        if actor.role == Role.MANAGER and is_self:
            rejected = self._reject_any(
                proposed,
                MANAGER_SELF_RESTRICTED_FIELDS,
                RejectionRule.MANAGER_SELF,
                MANAGER_SELF_RESTRICTED_FIELDS,
            )
            if rejected:
                return rejected

        if actor.role == Role.EMPLOYEE:
            writable = capability_for(actor.role).writable_on(is_self)
            disallowed = [f for f in proposed if f not in writable]
            if disallowed:
                return Rejected(
                    rule=RejectionRule.EMPLOYEE_ALLOWLIST,
                    forbidden_fields=[f.value for f in disallowed],
                    allowed_universe=ordered(writable),
                )

        return Allowed(fields=frozenset(proposed))

    @staticmethod
    def _reject_any(proposed, guarded, rule, universe) -> Optional[Rejected]:
        hits = [f for f in proposed if f in guarded]
        if not hits:
            return None
        return Rejected(
            rule=rule,
            forbidden_fields=[f.value for f in hits],
            allowed_universe=ordered(universe),
        )
