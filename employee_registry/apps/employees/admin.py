from django.contrib import admin

from employee_registry.apps.employees.models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['id', 'last_name', 'first_name', 'email', 'role', 'approved', 'employment_status']
    list_filter = ['role', 'approved', 'employment_status']
    search_fields = ['first_name', 'last_name', 'email']
    exclude = ['password', 'groups', 'user_permissions']
    readonly_fields = ['last_login', 'created_at', 'updated_at']
