"""
Structural change detection for approved employee updates.

``ChangeDiffer.diff`` never touches the record it is given; it returns a
``DiffResult`` holding the values to write, the per-field before/after pairs
for the audit trail and, separately, a new raw password.  Passwords never
appear in ``changes``.

Values are compared by their canonical JSON form, so nested objects such as
``address`` are equal when their content is equal regardless of key order or
object identity.  Only top-level fields are diffed: a new ``address.city``
is recorded as the whole ``address`` before and after.
"""
import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from django.core.serializers.json import DjangoJSONEncoder

from .fields import EmployeeField
from .value_objects import FieldChange


def canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, cls=DjangoJSONEncoder)


@dataclass(frozen=True)
class DiffResult:
    values: Dict[str, Any] = field(default_factory=dict)
    changes: Dict[str, FieldChange] = field(default_factory=dict)
    password: Optional[str] = None

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    def changes_payload(self) -> Dict[str, dict]:
        return {name: change.as_dict() for name, change in self.changes.items()}

    def apply_to(self, employee) -> None:
        for attname, value in self.values.items():
            setattr(employee, attname, value)
        if self.password:
            employee.set_password(self.password)


class ChangeDiffer:

    def diff(self, current, update: Mapping[Any, Any]) -> DiffResult:
        values = {}
        changes = {}
        password = None

        for name, incoming in update.items():
            employee_field = EmployeeField(name)
            if employee_field == EmployeeField.PASSWORD:
                password = incoming
                continue

            existing = getattr(current, employee_field.attname)
            if canonical(existing) == canonical(incoming):
                continue

            changes[employee_field.value] = FieldChange(
                field=employee_field.value,
                from_value=copy.deepcopy(existing),
                to_value=copy.deepcopy(incoming),
            )
            values[employee_field.attname] = copy.deepcopy(incoming)

        return DiffResult(values=values, changes=changes, password=password)
