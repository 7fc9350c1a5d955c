from types import SimpleNamespace

import pytest

from employee_registry.apps.common.exceptions import ValidationError
from employee_registry.apps.employees.domain.diff import ChangeDiffer
from employee_registry.apps.employees.domain.fields import EmployeeField
from employee_registry.apps.employees.domain.payload import parse_update


def make_record(**overrides):
    values = {
        'first_name': 'Jane',
        'last_name': 'Doe',
        'email': 'jane@example.com',
        'phone': '555-0100',
        'address': {'street': '1 Main St', 'city': 'Toronto', 'country': 'CA'},
        'emergency_contact': {},
        'profile_photo': '',
        'resume': '',
        'work_location': 'HQ',
        'employment_status': 'active',
        'occupation': 'Clerk',
        'role': 'Employee',
        'approved': True,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestChangeDiffer:

    def setup_method(self):
        self.differ = ChangeDiffer()

    def test_changed_field_is_reported_with_before_and_after(self):
        record = make_record()
        result = self.differ.diff(record, {EmployeeField.OCCUPATION: 'Analyst'})

        assert result.changes_payload() == {'occupation': {'from': 'Clerk', 'to': 'Analyst'}}
        assert result.values == {'occupation': 'Analyst'}
        assert record.occupation == 'Clerk'

    def test_equal_values_are_skipped(self):
        record = make_record()
        result = self.differ.diff(record, {EmployeeField.PHONE: '555-0100', EmployeeField.OCCUPATION: 'Clerk'})
        assert not result.has_changes
        assert result.values == {}

    def test_nested_objects_compare_by_content(self):
        record = make_record()
        same_address = {'country': 'CA', 'city': 'Toronto', 'street': '1 Main St'}
        result = self.differ.diff(record, {EmployeeField.ADDRESS: same_address})
        assert not result.has_changes

    def test_nested_change_records_whole_object(self):
        record = make_record()
        new_address = dict(record.address, city='Ottawa')
        result = self.differ.diff(record, {EmployeeField.ADDRESS: new_address})

        change = result.changes['address']
        assert change.from_value['city'] == 'Toronto'
        assert change.to_value['city'] == 'Ottawa'

    def test_recorded_values_do_not_alias_the_record(self):
        record = make_record()
        new_address = dict(record.address, city='Ottawa')
        result = self.differ.diff(record, {EmployeeField.ADDRESS: new_address})

        record.address['city'] = 'Montreal'
        new_address['city'] = 'Calgary'
        assert result.changes['address'].from_value['city'] == 'Toronto'
        assert result.changes['address'].to_value['city'] == 'Ottawa'

    def test_password_never_appears_in_changes(self):
        record = make_record()
        result = self.differ.diff(record, {EmployeeField.PASSWORD: 'N3w-Secret!', EmployeeField.PHONE: '555-0199'})

        assert 'password' not in result.changes
        assert result.password == 'N3w-Secret!'
        assert list(result.changes) == ['phone']

    def test_role_and_approved_are_diffed(self):
        record = make_record()
        result = self.differ.diff(record, {EmployeeField.ROLE: 'Manager', EmployeeField.APPROVED: False})
        assert result.changes_payload() == {
            'role': {'from': 'Employee', 'to': 'Manager'},
            'approved': {'from': True, 'to': False},
        }

    def test_apply_to_writes_values_and_hashes_password(self, mocker):
        record = make_record()
        record.set_password = mocker.Mock()
        result = self.differ.diff(record, {EmployeeField.PHONE: '555-0199', EmployeeField.PASSWORD: 'N3w-Secret!'})

        result.apply_to(record)

        assert record.phone == '555-0199'
        record.set_password.assert_called_once_with('N3w-Secret!')


class TestParseUpdate:

    def test_plain_fields(self):
        parsed = parse_update({'phone': '555-0199', 'occupation': 'Analyst'}, make_record())
        assert parsed.fields == {EmployeeField.PHONE: '555-0199', EmployeeField.OCCUPATION: 'Analyst'}
        assert parsed.unknown == []

    def test_dotted_keys_merge_into_current_object(self):
        record = make_record()
        parsed = parse_update({'address.city': 'Ottawa', 'address.postalCode': 'K1A'}, record)

        assert parsed.fields[EmployeeField.ADDRESS] == {
            'street': '1 Main St', 'city': 'Ottawa', 'country': 'CA', 'postalCode': 'K1A',
        }
        assert record.address['city'] == 'Toronto'

    def test_dotted_keys_merge_into_payload_object(self):
        parsed = parse_update(
            {'emergencyContact': {'name': 'Sam'}, 'emergencyContact.phone': '555-0123'},
            make_record(),
        )
        assert parsed.fields[EmployeeField.EMERGENCY_CONTACT] == {'name': 'Sam', 'phone': '555-0123'}

    def test_dotted_keys_with_non_object_payload_value(self):
        parsed = parse_update({'address': 'not-an-object', 'address.city': 'Oslo'}, make_record())

        assert parsed.malformed == ['address']
        assert parsed.fields[EmployeeField.ADDRESS] == 'not-an-object'
        with pytest.raises(ValidationError, match='address must be an object'):
            parsed.raise_for_problems()

    def test_unknown_names_are_collected(self):
        parsed = parse_update({'salary': 1, 'address.planet': 'Mars', 'phone': '1'}, make_record())
        assert parsed.unknown == ['salary', 'address.planet']
        with pytest.raises(ValidationError) as exc_info:
            parsed.raise_for_problems()
        assert exc_info.value.extra == {'unknownFields': ['salary', 'address.planet']}

    def test_sub_field_on_flat_field_is_unknown(self):
        parsed = parse_update({'phone.mobile': '1'}, make_record())
        assert parsed.unknown == ['phone.mobile']

    def test_empty_update_is_rejected(self):
        parsed = parse_update({}, make_record())
        with pytest.raises(ValidationError, match='No fields to update'):
            parsed.raise_for_problems()

    def test_non_object_body_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_update(['phone'], make_record())
