"""Tests for the User aggregate's address book."""

from datetime import datetime, timedelta

import pytest
from protean import atomic_change
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.user.events import AddressAdded, DefaultAddressChanged, UserRegistered
from storefront.user.user import Role, User


def _address_fields(**overrides):
    fields = {
        "alias": "Casa",
        "full_name": "María Pérez",
        "phone": "+58 412-1234567",
        "state": "Miranda",
        "city": "Los Teques",
        "address_line": "Calle 5",
    }
    fields.update(overrides)
    return fields


@pytest.fixture()
def user():
    user = User.register(email="maria@example.com", google_id="g-1", name="María")
    user._events.clear()
    return user


class TestRegistration:
    def test_defaults(self):
        user = User.register(email="maria@example.com", google_id="g-1")
        assert user.role == Role.USER.value
        assert user.is_admin is False
        assert user.is_active is True
        assert isinstance(user._events[0], UserRegistered)

    def test_refresh_identity_keeps_missing_values(self, user):
        user.refresh_identity(email="new@example.com", name=None, avatar="https://img/a.png")
        assert user.email == "new@example.com"
        assert user.name == "María"
        assert user.avatar == "https://img/a.png"

    def test_update_profile(self, user):
        user.update_profile(nickname="Mari", phone="0412")
        assert user.nickname == "Mari"
        assert user.phone == "0412"
        assert user.name == "María"


class TestAddingAddresses:
    def test_add_address(self, user):
        address = user.add_address(**_address_fields())
        assert address.is_default is False
        assert address.is_active is True
        assert isinstance(user._events[-1], AddressAdded)

    def test_new_default_replaces_previous_default(self, user):
        first = user.add_address(is_default=True, **_address_fields(alias="Casa"))
        second = user.add_address(is_default=True, **_address_fields(alias="Oficina"))

        assert first.is_default is False
        assert second.is_default is True
        assert [a.id for a in user.addresses if a.is_default] == [second.id]

    def test_two_defaults_violate_the_invariant(self, user):
        home = user.add_address(is_default=True, **_address_fields(alias="Casa"))
        office = user.add_address(**_address_fields(alias="Oficina"))

        with pytest.raises(ValidationError):
            with atomic_change(user):
                home.is_default = True
                office.is_default = True


class TestChangingDefaults:
    def test_set_default(self, user):
        home = user.add_address(is_default=True, **_address_fields(alias="Casa"))
        office = user.add_address(**_address_fields(alias="Oficina"))
        user._events.clear()

        user.set_default_address(office.id)

        assert office.is_default is True
        assert home.is_default is False
        event = user._events[-1]
        assert isinstance(event, DefaultAddressChanged)
        assert event.previous_default_address_id == home.id

    def test_update_with_default_flag(self, user):
        home = user.add_address(is_default=True, **_address_fields(alias="Casa"))
        office = user.add_address(**_address_fields(alias="Oficina"))

        user.update_address(office.id, is_default=True, city="Caracas")

        assert office.is_default is True
        assert office.city == "Caracas"
        assert home.is_default is False

    def test_update_can_clear_default(self, user):
        home = user.add_address(is_default=True, **_address_fields())
        user.update_address(home.id, is_default=False)
        assert home.is_default is False

    def test_removing_the_default_clears_it(self, user):
        home = user.add_address(is_default=True, **_address_fields())
        user.remove_address(home.id)

        assert home.is_active is False
        assert home.is_default is False
        assert user.active_addresses == []


class TestLookup:
    def test_unknown_address(self, user):
        with pytest.raises(ObjectNotFoundError):
            user.address("missing")

    def test_removed_address_is_not_found(self, user):
        address = user.add_address(**_address_fields())
        user.remove_address(address.id)
        with pytest.raises(ObjectNotFoundError):
            user.address(address.id)

    def test_active_addresses_default_first_then_newest(self, user):
        oldest = user.add_address(**_address_fields(alias="A"))
        default = user.add_address(is_default=True, **_address_fields(alias="B"))
        newest = user.add_address(**_address_fields(alias="C"))
        oldest.created_at = datetime.now() - timedelta(days=2)
        default.created_at = datetime.now() - timedelta(days=1)

        assert [a.alias for a in user.active_addresses] == [default.alias, newest.alias, oldest.alias]
