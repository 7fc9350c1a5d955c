"""
Custom JWT serializers: login by email, approval gate, role claims.
"""
from rest_framework import exceptions
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


def employee_summary(employee) -> dict:
    return {
        'id': employee.pk,
        'firstName': employee.first_name,
        'lastName': employee.last_name,
        'email': employee.email,
        'role': employee.role,
        'approved': employee.approved,
    }


class EmployeeTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Issues tokens only to approved employees and puts the role into the token
    """

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        token['role'] = user.role
        token['name'] = user.get_full_name()
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.approved:
            raise exceptions.PermissionDenied('Account not yet approved by manager')
        data['employee'] = employee_summary(self.user)
        return data


def get_tokens_for_employee(employee) -> dict:
    """
    Token pair for a freshly registered employee.

    Returns:
        dict: {'refresh': '...', 'access': '...'}
    """
    refresh = EmployeeTokenObtainPairSerializer.get_token(employee)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }
