from collections.abc import Mapping
from typing import Any, Dict

from rest_framework import serializers
from rest_framework.fields import empty

from employee_registry.apps.employees.domain.fields import EmployeeField, EmploymentStatus, Role
from employee_registry.apps.employees.models import Employee
from employee_registry.apps.employees.validators import check_password_policy, validated_or_raise


class EmployeeSerializer(serializers.ModelSerializer):
    """
    Read representation of an employee.  Field names follow the API's
    camelCase vocabulary; the password hash is never exposed.
    """
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    emergencyContact = serializers.JSONField(source='emergency_contact', read_only=True)
    profilePhoto = serializers.CharField(source='profile_photo', read_only=True)
    workLocation = serializers.CharField(source='work_location', read_only=True)
    employmentStatus = serializers.CharField(source='employment_status', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Employee
        fields = (
            'id', 'firstName', 'lastName', 'email', 'phone', 'address',
            'emergencyContact', 'profilePhoto', 'resume', 'workLocation',
            'employmentStatus', 'occupation', 'role', 'approved',
            'createdAt', 'updatedAt',
        )
        read_only_fields = fields


class EmployeeSummarySerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)

    class Meta:
        model = Employee
        fields = ('id', 'firstName', 'lastName', 'email', 'role')
        read_only_fields = fields


class OptionalTextField(serializers.CharField):
    """Text that may be blank; ``null`` clears it to an empty string."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        value = super().run_validation(data)
        return '' if value is None else value


class NestedObjectSerializer(serializers.Serializer):
    """
    JSON object stored in one column.  Unknown keys are rejected and
    ``null`` clears the object.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(*args, **kwargs)

    def run_validation(self, data=empty):
        value = super().run_validation(data)
        return {} if value is None else dict(value)

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            unknown = [key for key in data if key not in self.fields]
            if unknown:
                raise serializers.ValidationError({key: 'Unknown field.' for key in unknown})
        return super().to_internal_value(data)


class AddressSerializer(NestedObjectSerializer):
    street = OptionalTextField(max_length=255)
    city = OptionalTextField(max_length=100)
    province = OptionalTextField(max_length=100)
    country = OptionalTextField(max_length=100)
    postalCode = OptionalTextField(max_length=20)


class EmergencyContactSerializer(NestedObjectSerializer):
    name = OptionalTextField(max_length=200)
    relation = OptionalTextField(max_length=100)
    phone = OptionalTextField(max_length=30)


class EmployeeValuesSerializer(serializers.Serializer):
    """
    Checks the values of an employee write.  Keys are the API's field names,
    ``validated_data`` is keyed by model attribute.
    """
    firstName = serializers.CharField(source='first_name', max_length=100)
    lastName = serializers.CharField(source='last_name', max_length=100)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        validators=[check_password_policy],
    )
    phone = OptionalTextField(max_length=30)
    address = AddressSerializer()
    emergencyContact = EmergencyContactSerializer(source='emergency_contact')
    profilePhoto = OptionalTextField(source='profile_photo', max_length=255)
    resume = OptionalTextField(max_length=255)
    workLocation = OptionalTextField(source='work_location', max_length=255)
    employmentStatus = serializers.ChoiceField(
        source='employment_status', choices=EmploymentStatus.choices, required=False
    )
    occupation = OptionalTextField(max_length=255)
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    approved = serializers.BooleanField(required=False)


class RegisterSerializer(EmployeeValuesSerializer):
    """Self-registration body.  Role, approval and status are not accepted."""
    employmentStatus = None
    role = None
    approved = None


def clean_update(update: Dict[EmployeeField, Any]) -> Dict[EmployeeField, Any]:
    """
    Validate the values of an already-authorized update.

    Raises the registry ``ValidationError`` listing every invalid field.
    """
    serializer = EmployeeValuesSerializer(
        data={employee_field.value: value for employee_field, value in update.items()},
        partial=True,
    )
    values = validated_or_raise(serializer)
    return {employee_field: values[employee_field.attname] for employee_field in update}


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField()
