"""
Append-only audit trail of employee record changes.

One table holds both sinks, told apart by ``kind``:

* ``manager`` - a Manager or Admin changed another employee's record;
  ``target`` and ``action`` are set.
* ``self``    - an Employee changed their own record; ``target`` is empty.

``changes`` maps a field name to ``{"from": ..., "to": ...}``.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class AuditEntryImmutable(Exception):
    pass


class AuditEntry(models.Model):
    """A single recorded change-set."""

    class Kind(models.TextChoices):
        MANAGER = 'manager', 'Manager update'
        SELF = 'self', 'Self update'

    MANAGER_UPDATE_ACTION = 'Updated employee profile'

    kind = models.CharField(max_length=10, choices=Kind.choices)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='audit_entries_made',
    )
    target = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='audit_entries_received',
        null=True,
        blank=True,
    )
    action = models.CharField(max_length=255, blank=True, default='')
    changes = models.JSONField(default=dict)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'audit_entries'
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['kind', 'timestamp'], name='audit_kind_ts_idx'),
            models.Index(fields=['actor', 'timestamp'], name='audit_actor_ts_idx'),
        ]
        verbose_name = 'Audit entry'
        verbose_name_plural = 'Audit entries'

    def __str__(self):
        return f"{self.get_kind_display()} by {self.actor_id} at {self.timestamp}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AuditEntryImmutable('Audit entries cannot be modified')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AuditEntryImmutable('Audit entries cannot be deleted')
