from dataclasses import dataclass
from typing import Any

from .fields import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated employee performing a request."""
    id: int
    role: Role

    @classmethod
    def from_user(cls, user) -> 'Actor':
        return cls(id=user.pk, role=Role(user.role))

    def is_self(self, target_id) -> bool:
        return str(self.id) == str(target_id)


@dataclass(frozen=True)
class FieldChange:
    field: str
    from_value: Any
    to_value: Any

    def as_dict(self) -> dict:
        return {'from': self.from_value, 'to': self.to_value}

    def __str__(self):
        return f"{self.field}: {self.from_value!r} -> {self.to_value!r}"
