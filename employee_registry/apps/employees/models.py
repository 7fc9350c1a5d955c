from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.db import models

from employee_registry.apps.employees.domain.fields import EmploymentStatus, Role


class EmployeeManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Employees must have an email address')
        employee = self.model(email=self.normalize_email(email), **extra_fields)
        employee.set_password(password)
        employee.save(using=self._db)
        return employee

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', Role.ADMIN)
        extra_fields.setdefault('approved', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class Employee(AbstractBaseUser, PermissionsMixin):
    """Employee identity record; also the authenticated user model."""

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True, default='')

    # {street, city, province, country, postalCode}
    address = models.JSONField(default=dict, blank=True)
    # {name, relation, phone}
    emergency_contact = models.JSONField(default=dict, blank=True)

    profile_photo = models.CharField(max_length=255, blank=True, default='')
    resume = models.CharField(max_length=255, blank=True, default='')
    work_location = models.CharField(max_length=255, blank=True, default='')
    employment_status = models.CharField(
        max_length=20,
        choices=EmploymentStatus.choices,
        default=EmploymentStatus.ACTIVE,
    )
    occupation = models.CharField(max_length=255, blank=True, default='')

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.EMPLOYEE)
    approved = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EmployeeManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        db_table = 'employees'
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_staff(self):
        return self.role == Role.ADMIN

    @property
    def is_terminated(self):
        return self.employment_status == EmploymentStatus.TERMINATED

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_short_name(self):
        return self.first_name
