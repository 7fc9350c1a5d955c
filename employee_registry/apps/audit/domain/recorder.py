"""
Routes an employee change-set to the right audit sink.

Only two relationships are audited:

* a Manager or Admin changing someone else's record -> manager log;
* an Employee changing their own record -> self log.

Managers and Admins editing themselves leave no entry.  An empty change-set
never produces an entry.
"""
import logging
from typing import Mapping, Optional

from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.employees.domain.fields import Role
from employee_registry.apps.employees.domain.value_objects import Actor, FieldChange

logger = logging.getLogger(__name__)

MANAGER_LOG_AUTHORS = frozenset({Role.MANAGER, Role.ADMIN})


def sink_for(actor: Actor, target_id) -> Optional[str]:
    """The ``AuditEntry.Kind`` an actor/target pair is logged under, if any."""
    is_self = actor.is_self(target_id)
    if actor.role in MANAGER_LOG_AUTHORS and not is_self:
        return AuditEntry.Kind.MANAGER
    if actor.role == Role.EMPLOYEE and is_self:
        return AuditEntry.Kind.SELF
    return None


class AuditRecorder:

    def record(self, actor: Actor, target, changes: Mapping[str, FieldChange]) -> Optional[AuditEntry]:
        if not changes:
            return None

        kind = sink_for(actor, target.pk)
        if kind is None:
            logger.debug(f"No audit sink for {actor.role} {actor.id} editing employee {target.pk}")
            return None

        payload = {name: change.as_dict() for name, change in changes.items()}
        if kind == AuditEntry.Kind.MANAGER:
            entry = AuditEntry.objects.create(
                kind=kind,
                actor_id=actor.id,
                target_id=target.pk,
                action=AuditEntry.MANAGER_UPDATE_ACTION,
                changes=payload,
            )
        else:
            entry = AuditEntry.objects.create(
                kind=kind,
                actor_id=actor.id,
                changes=payload,
            )

        logger.info(
            f"Audit {kind} entry {entry.pk}: employee {actor.id} changed "
            f"{', '.join(sorted(payload))} on employee {target.pk}"
        )
        return entry
