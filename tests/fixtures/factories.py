import factory
from factory.django import DjangoModelFactory

from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.employees.domain.fields import Role
from employee_registry.apps.employees.models import Employee

DEFAULT_PASSWORD = 'Passw0rd!'


class EmployeeFactory(DjangoModelFactory):
    class Meta:
        model = Employee
        django_get_or_create = ('email',)

    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    email = factory.Sequence(lambda n: f'employee{n}@example.com')
    phone = '555-0100'
    occupation = 'Clerk'
    role = Role.EMPLOYEE
    approved = True
    password = factory.PostGenerationMethodCall('set_password', DEFAULT_PASSWORD)


class ManagerFactory(EmployeeFactory):
    email = factory.Sequence(lambda n: f'manager{n}@example.com')
    occupation = 'Team Lead'
    role = Role.MANAGER


class AdminFactory(EmployeeFactory):
    email = factory.Sequence(lambda n: f'admin{n}@example.com')
    occupation = 'HR Administrator'
    role = Role.ADMIN


class ManagerLogEntryFactory(DjangoModelFactory):
    class Meta:
        model = AuditEntry

    kind = AuditEntry.Kind.MANAGER
    actor = factory.SubFactory(ManagerFactory)
    target = factory.SubFactory(EmployeeFactory)
    action = AuditEntry.MANAGER_UPDATE_ACTION
    changes = factory.LazyFunction(lambda: {'occupation': {'from': 'Clerk', 'to': 'Analyst'}})


class SelfLogEntryFactory(DjangoModelFactory):
    class Meta:
        model = AuditEntry

    kind = AuditEntry.Kind.SELF
    actor = factory.SubFactory(EmployeeFactory)
    target = None
    changes = factory.LazyFunction(lambda: {'phone': {'from': '555-0100', 'to': '555-0199'}})
