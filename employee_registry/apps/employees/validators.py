from django.conf import settings
from django.core import exceptions as django_exceptions
from django.core.validators import RegexValidator

from employee_registry.apps.common.exceptions import ValidationError

PASSWORD_POLICY_MESSAGE = (
    "Password must include uppercase, lowercase, number, special char, "
    "and be at least 8 characters."
)


def password_policy_validator() -> RegexValidator:
    return RegexValidator(
        regex=settings.EMPLOYEE_REGISTRY['PASSWORD_POLICY_REGEX'],
        message=PASSWORD_POLICY_MESSAGE,
    )


def check_password_policy(value):
    """Field-level validator; raises Django's ``ValidationError``."""
    password_policy_validator()(value)


def validate_password_policy(value):
    try:
        check_password_policy(value)
    except django_exceptions.ValidationError:
        raise ValidationError(PASSWORD_POLICY_MESSAGE)


def flatten_errors(detail):
    """DRF error detail -> ``{field: "message"}``, nested objects kept as dicts."""
    if isinstance(detail, dict):
        return {str(key): flatten_errors(value) for key, value in detail.items()}
    if isinstance(detail, list):
        return ' '.join(str(flatten_errors(item)) for item in detail)
    return str(detail)


def validated_or_raise(serializer, message='Invalid field value(s)'):
    """
    Run a DRF serializer and return its ``validated_data``.

    Raises the registry ``ValidationError`` listing every invalid field at once.
    """
    if not serializer.is_valid():
        raise ValidationError(message, errors=flatten_errors(serializer.errors))
    return serializer.validated_data
