"""
Management command to create demo accounts for each role.

Creates an approved Admin, Manager and Employee.  Accounts whose email
already exists are left untouched, so the command can be run repeatedly.
An optional ``--password`` argument sets the password of the new accounts;
it must satisfy the registration password policy.
"""

from django.core.management.base import BaseCommand, CommandError

from employee_registry.apps.common.exceptions import ValidationError
from employee_registry.apps.employees.domain.fields import Role
from employee_registry.apps.employees.models import Employee
from employee_registry.apps.employees.validators import validate_password_policy

DEMO_ACCOUNTS = [
    {'email': 'admin@example.com', 'first_name': 'Ada', 'last_name': 'Admin',
     'role': Role.ADMIN, 'occupation': 'HR Administrator', 'is_superuser': True},
    {'email': 'manager@example.com', 'first_name': 'Mark', 'last_name': 'Smith',
     'role': Role.MANAGER, 'occupation': 'Team Lead'},
    {'email': 'employee@example.com', 'first_name': 'Erin', 'last_name': 'Jones',
     'role': Role.EMPLOYEE, 'occupation': 'Clerk'},
]


class Command(BaseCommand):
    help = "Creates demo Admin, Manager and Employee accounts."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default="Passw0rd!",
            help="Password for the created accounts.",
        )

    def handle(self, *args, **options):
        password = options["password"]
        try:
            validate_password_policy(password)
        except ValidationError as exc:
            raise CommandError(exc.message)

        created = 0
        for account in DEMO_ACCOUNTS:
            fields = dict(account)
            email = fields.pop('email')
            if Employee.objects.filter(email__iexact=email).exists():
                self.stdout.write(f"{email} already exists, skipping")
                continue
            Employee.objects.create_user(email, password, approved=True, **fields)
            created += 1
            self.stdout.write(f"Created {fields['role']} {email}")

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} account(s)."))
