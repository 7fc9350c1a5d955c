"""
Turns a raw update body into ``{EmployeeField: value}``.

Besides plain field names the body may carry dotted sub-field keys for the
nested fields (``address.city``, ``emergencyContact.phone``).  Those are
merged into the record's current nested object, so from here on the update
only ever names top-level fields.

Unrecognised keys are collected rather than raised so that the caller can
run the permission check first and report authorization problems ahead of
input problems.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from employee_registry.apps.common.exceptions import ValidationError

from .fields import NESTED_SUBFIELDS, EmployeeField


@dataclass
class ParsedUpdate:
    fields: Dict[EmployeeField, Any] = field(default_factory=dict)
    unknown: List[str] = field(default_factory=list)
    malformed: List[str] = field(default_factory=list)

    def raise_for_problems(self):
        if self.unknown:
            raise ValidationError(
                f"Unknown field(s): {', '.join(self.unknown)}",
                unknownFields=self.unknown,
            )
        if self.malformed:
            raise ValidationError(f"{', '.join(self.malformed)} must be an object")
        if not self.fields:
            raise ValidationError('No fields to update')


def parse_update(payload: Mapping[str, Any], current) -> ParsedUpdate:
    if not isinstance(payload, Mapping):
        raise ValidationError('Update body must be an object')

    parsed = ParsedUpdate()
    dotted: Dict[EmployeeField, Dict[str, Any]] = {}

    for key, value in payload.items():
        name, _, sub = str(key).partition('.')
        try:
            employee_field = EmployeeField(name)
        except ValueError:
            parsed.unknown.append(str(key))
            continue
        if not sub:
            parsed.fields[employee_field] = value
        elif employee_field.is_nested and sub in NESTED_SUBFIELDS[employee_field]:
            dotted.setdefault(employee_field, {})[sub] = value
        else:
            parsed.unknown.append(str(key))

    for employee_field, subvalues in dotted.items():
        if employee_field in parsed.fields:
            base = parsed.fields[employee_field]
            if not isinstance(base, dict):
                parsed.malformed.append(employee_field.value)
                continue
        else:
            base = getattr(current, employee_field.attname)
        merged = copy.deepcopy(base) if isinstance(base, dict) else {}
        merged.update(subvalues)
        parsed.fields[employee_field] = merged

    return parsed
