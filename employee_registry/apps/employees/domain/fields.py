"""
Closed vocabularies for employee records: roles, employment statuses and
the names of the fields a client may write.

Field names are the ones used on the wire and as keys of audit ``changes``;
``EmployeeField.attname`` maps them onto ``Employee`` model attributes.
"""
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'Admin', 'Admin'
    MANAGER = 'Manager', 'Manager'
    EMPLOYEE = 'Employee', 'Employee'


class EmploymentStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ON_LEAVE = 'on-leave', 'On leave'
    TERMINATED = 'terminated', 'Terminated'


class EmployeeField(models.TextChoices):
    FIRST_NAME = 'firstName', 'First name'
    LAST_NAME = 'lastName', 'Last name'
    EMAIL = 'email', 'Email'
    PASSWORD = 'password', 'Password'
    PHONE = 'phone', 'Phone'
    ADDRESS = 'address', 'Address'
    EMERGENCY_CONTACT = 'emergencyContact', 'Emergency contact'
    PROFILE_PHOTO = 'profilePhoto', 'Profile photo'
    RESUME = 'resume', 'Resume'
    WORK_LOCATION = 'workLocation', 'Work location'
    EMPLOYMENT_STATUS = 'employmentStatus', 'Employment status'
    OCCUPATION = 'occupation', 'Occupation'
    ROLE = 'role', 'Role'
    APPROVED = 'approved', 'Approved'

    @property
    def attname(self) -> str:
        return FIELD_ATTNAMES[self]

    @property
    def is_nested(self) -> bool:
        return self in NESTED_SUBFIELDS


FIELD_ATTNAMES = {
    EmployeeField.FIRST_NAME: 'first_name',
    EmployeeField.LAST_NAME: 'last_name',
    EmployeeField.EMAIL: 'email',
    EmployeeField.PASSWORD: 'password',
    EmployeeField.PHONE: 'phone',
    EmployeeField.ADDRESS: 'address',
    EmployeeField.EMERGENCY_CONTACT: 'emergency_contact',
    EmployeeField.PROFILE_PHOTO: 'profile_photo',
    EmployeeField.RESUME: 'resume',
    EmployeeField.WORK_LOCATION: 'work_location',
    EmployeeField.EMPLOYMENT_STATUS: 'employment_status',
    EmployeeField.OCCUPATION: 'occupation',
    EmployeeField.ROLE: 'role',
    EmployeeField.APPROVED: 'approved',
}

# Sub-keys accepted inside the JSON-backed nested fields
NESTED_SUBFIELDS = {
    EmployeeField.ADDRESS: ('street', 'city', 'province', 'country', 'postalCode'),
    EmployeeField.EMERGENCY_CONTACT: ('name', 'relation', 'phone'),
}

ALL_FIELDS = frozenset(EmployeeField)
