import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status

from employee_registry.apps.audit.models import AuditEntry
from employee_registry.apps.employees.domain.fields import EmploymentStatus, Role
from employee_registry.apps.employees.models import Employee
from employee_registry.apps.employees.validators import PASSWORD_POLICY_MESSAGE
from tests.fixtures.factories import DEFAULT_PASSWORD, AdminFactory, EmployeeFactory, ManagerFactory


@pytest.mark.django_db
class TestEmployeeUpdateAPI:

    def test_manager_updates_employee(self, api_client):
        manager = ManagerFactory()
        employee = EmployeeFactory(occupation='Clerk')
        api_client.force_authenticate(user=manager)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.put(url, {'occupation': 'Analyst'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Employee updated successfully'
        assert response.data['employee']['occupation'] == 'Analyst'
        assert 'password' not in response.data['employee']
        assert response.data['changes'] == {'occupation': {'from': 'Clerk', 'to': 'Analyst'}}

    def test_patch_behaves_like_put(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.patch(url, {'address.city': 'Ottawa'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['employee']['address']['city'] == 'Ottawa'

    def test_manager_cannot_approve_through_update(self, api_client):
        manager = ManagerFactory()
        employee = EmployeeFactory(approved=False)
        api_client.force_authenticate(user=manager)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.put(url, {'approved': True}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {
            'message': 'Only Admin can update: approved',
            'allowedOnlyByAdmin': ['role', 'approved'],
        }

    def test_employee_editing_someone_else_is_forbidden(self, api_client):
        employee = EmployeeFactory()
        other = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': other.pk})
        response = api_client.put(url, {'email': 'mine@example.com'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'message': 'You can only update your own profile'}

    def test_employee_outside_allowlist(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.put(url, {'workLocation': 'Remote'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['message'] == 'You cannot update: workLocation'
        assert 'email' in response.data['allowedFields']

    def test_unknown_employee(self, api_client):
        api_client.force_authenticate(user=AdminFactory())

        url = reverse('employee-detail', kwargs={'pk': 999999})
        response = api_client.put(url, {'phone': '1'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'message': 'Employee not found'}

    def test_empty_body(self, api_client):
        admin = AdminFactory()
        api_client.force_authenticate(user=admin)

        url = reverse('employee-detail', kwargs={'pk': admin.pk})
        response = api_client.put(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'No fields to update'

    def test_dotted_key_with_non_object_value(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.patch(url, {'address': 'not-an-object', 'address.city': 'Oslo'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'message': 'address must be an object'}
        assert AuditEntry.objects.count() == 0

    def test_forbidden_is_reported_before_malformed_values(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': EmployeeFactory().pk})
        response = api_client.patch(url, {'address': 'not-an-object', 'address.city': 'Oslo'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_value_type(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.patch(url, {'email': 123, 'emergencyContact': ['Sam']}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.data['errors']) == {'email', 'emergencyContact'}


    def test_unauthenticated(self, api_client):
        employee = EmployeeFactory()
        url = reverse('employee-detail', kwargs={'pk': employee.pk})
        response = api_client.put(url, {'phone': '1'}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestEmployeeReadAPI:

    def test_list_is_admin_only(self, api_client):
        api_client.force_authenticate(user=ManagerFactory())
        response = api_client.get(reverse('employee-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'message': 'Admin access only'}

    def test_list_excludes_terminated(self, api_client):
        admin = AdminFactory()
        active = EmployeeFactory()
        EmployeeFactory(employment_status=EmploymentStatus.TERMINATED)
        api_client.force_authenticate(user=admin)

        response = api_client.get(reverse('employee-list'))

        assert response.status_code == status.HTTP_200_OK
        ids = {item['id'] for item in response.data}
        assert ids == {admin.pk, active.pk}

    def test_retrieve_strips_password(self, api_client):
        employee = EmployeeFactory(first_name='Jane')
        api_client.force_authenticate(user=EmployeeFactory())

        response = api_client.get(reverse('employee-detail', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['firstName'] == 'Jane'
        assert 'password' not in response.data


@pytest.mark.django_db
class TestRegistrationAndLoginAPI:

    def test_register(self, api_client):
        payload = {
            'firstName': 'Eve',
            'lastName': 'Stone',
            'email': 'eve@example.com',
            'password': 'Passw0rd!',
            'role': 'Admin',
        }
        response = api_client.post(reverse('employee-register'), payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['access']
        assert response.data['refresh']
        assert response.data['employee']['role'] == Role.EMPLOYEE
        assert response.data['employee']['approved'] is False

    def test_register_duplicate(self, api_client):
        EmployeeFactory(email='eve@example.com')
        payload = {'firstName': 'Eve', 'lastName': 'Stone', 'email': 'eve@example.com', 'password': 'Passw0rd!'}

        response = api_client.post(reverse('employee-register'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'message': 'Employee already exists'}

    def test_register_non_string_email(self, api_client):
        payload = {'firstName': 'Eve', 'lastName': 'Stone', 'email': 123, 'password': 'Passw0rd!'}

        response = api_client.post(reverse('employee-register'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Invalid registration details'
        assert 'email' in response.data['errors']
        assert not Employee.objects.exists()

    def test_register_weak_password(self, api_client):
        payload = {'firstName': 'Eve', 'lastName': 'Stone', 'email': 'eve@example.com', 'password': 'password'}

        response = api_client.post(reverse('employee-register'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'] == {'password': PASSWORD_POLICY_MESSAGE}


    def test_login_approved(self, api_client):
        EmployeeFactory(email='jane@example.com')

        response = api_client.post(
            reverse('employee-login'), {'email': 'jane@example.com', 'password': DEFAULT_PASSWORD}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert response.data['employee']['email'] == 'jane@example.com'

    def test_login_not_approved(self, api_client):
        EmployeeFactory(email='jane@example.com', approved=False)

        response = api_client.post(
            reverse('employee-login'), {'email': 'jane@example.com', 'password': DEFAULT_PASSWORD}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'message': 'Account not yet approved by manager'}

    def test_login_wrong_password(self, api_client):
        EmployeeFactory(email='jane@example.com')

        response = api_client.post(
            reverse('employee-login'), {'email': 'jane@example.com', 'password': 'Wr0ng-pass!'}, format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_authenticates_requests(self, api_client):
        employee = EmployeeFactory(email='jane@example.com')
        login = api_client.post(
            reverse('employee-login'), {'email': 'jane@example.com', 'password': DEFAULT_PASSWORD}, format='json'
        )

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = api_client.get(reverse('employee-detail', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_200_OK


@pytest.mark.django_db
class TestLifecycleAPI:

    def test_manager_approves(self, api_client):
        employee = EmployeeFactory(approved=False)
        api_client.force_authenticate(user=ManagerFactory())

        response = api_client.put(reverse('employee-approve', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Employee approved successfully'
        employee.refresh_from_db()
        assert employee.approved is True

    def test_employee_cannot_approve(self, api_client):
        employee = EmployeeFactory(approved=False)
        api_client.force_authenticate(user=EmployeeFactory())

        response = api_client.put(reverse('employee-approve', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_soft_deletes(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=AdminFactory())

        response = api_client.delete(reverse('employee-detail', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'message': 'Employee marked as terminated (soft deleted).'}
        employee.refresh_from_db()
        assert employee.employment_status == EmploymentStatus.TERMINATED
        assert Employee.objects.filter(pk=employee.pk).exists()

    def test_manager_cannot_delete(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=ManagerFactory())

        response = api_client.delete(reverse('employee-detail', kwargs={'pk': employee.pk}))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestUploadAPI:

    def test_upload_resume(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)
        upload = SimpleUploadedFile('cv.pdf', b'%PDF-1.4 test', content_type='application/pdf')

        url = reverse('employee-upload', kwargs={'pk': employee.pk}) + '?type=resume'
        response = api_client.post(url, {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['employee']['resume'].startswith('uploads/cv-')
        assert AuditEntry.objects.get().kind == AuditEntry.Kind.SELF

    def test_upload_without_file(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)

        url = reverse('employee-upload', kwargs={'pk': employee.pk}) + '?type=profile'
        response = api_client.post(url, {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'message': 'File not uploaded'}

    def test_upload_invalid_type(self, api_client):
        employee = EmployeeFactory()
        api_client.force_authenticate(user=employee)
        upload = SimpleUploadedFile('me.png', b'\x89PNG', content_type='image/png')

        url = reverse('employee-upload', kwargs={'pk': employee.pk}) + '?type=avatar'
        response = api_client.post(url, {'file': upload}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'message': 'Invalid upload type'}
