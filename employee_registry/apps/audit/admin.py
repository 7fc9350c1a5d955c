from django.contrib import admin

from employee_registry.apps.audit.models import AuditEntry


@admin.register(AuditEntry)
class AuditEntryAdmin(admin.ModelAdmin):
    """Audit entries are append-only, so the admin only reads them."""
    list_display = ['timestamp', 'kind', 'actor', 'target', 'action']
    list_filter = ['kind', 'timestamp']
    search_fields = ['actor__last_name', 'actor__first_name', 'target__last_name', 'action']
    readonly_fields = ['kind', 'actor', 'target', 'action', 'changes', 'timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
