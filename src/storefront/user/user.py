"""User aggregate root with the Address entity (the user's address book)."""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from storefront.domain import storefront


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@storefront.entity(part_of="User")
class Address:
    """A delivery address. Removed addresses stay on file (``is_active=False``)
    so that orders shipped to them keep a readable destination."""

    alias: String(required=True, max_length=50)
    full_name: String(required=True, max_length=100)
    phone: String(required=True, max_length=20)
    state: String(required=True, max_length=100)
    city: String(required=True, max_length=100)
    municipality: String(max_length=100)
    address_line: String(required=True, max_length=500)
    zip_code: String(max_length=20)
    reference: String(max_length=500)
    is_default: Boolean(default=False)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)


@storefront.aggregate
class User:
    """A shopper or administrator, identified by Google sign-in.

    The address book is part of the aggregate, so "at most one default
    address" is checked and persisted as a single change together with
    the version check on the user record.
    """

    email: String(required=True, max_length=255, unique=True)
    google_id: String(max_length=255, unique=True)
    name: String(max_length=150)
    nickname: String(max_length=50)
    avatar: String(max_length=500)
    phone: String(max_length=20)
    role: String(choices=Role, default=Role.USER.value)
    is_active: Boolean(default=True)
    addresses: HasMany(Address)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def at_most_one_default_address(self):
        defaults = [a for a in self.addresses if a.is_active and a.is_default]
        if len(defaults) > 1:
            raise ValidationError({"addresses": ["Only one address can be the default"]})

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    @property
    def active_addresses(self):
        """Active addresses, default first, then newest first."""
        newest_first = sorted(
            (a for a in self.addresses if a.is_active),
            key=lambda a: a.created_at,
            reverse=True,
        )
        return sorted(newest_first, key=lambda a: not a.is_default)

    @classmethod
    def register(cls, email, google_id=None, name=None, avatar=None, role=Role.USER.value):
        from storefront.user.events import UserRegistered

        now = datetime.now()
        user = cls(
            email=email,
            google_id=google_id,
            name=name,
            avatar=avatar,
            role=role,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email,
                role=role,
                registered_at=now,
            )
        )
        return user

    def refresh_identity(self, email, name=None, avatar=None):
        """Copy the latest profile data from the identity provider."""
        self.email = email
        if name is not None:
            self.name = name
        if avatar is not None:
            self.avatar = avatar
        self.updated_at = datetime.now()

    def update_profile(self, name=None, nickname=None, phone=None):
        if name is not None:
            self.name = name
        if nickname is not None:
            self.nickname = nickname
        if phone is not None:
            self.phone = phone
        self.updated_at = datetime.now()

    def address(self, address_id):
        """Return an owned, active address or raise ObjectNotFoundError."""
        address = next((a for a in self.addresses if a.id == address_id and a.is_active), None)
        if address is None:
            raise ObjectNotFoundError({"address": [f"Address {address_id} not found"]})
        return address

    def add_address(self, is_default=False, **fields):
        from storefront.user.events import AddressAdded

        now = datetime.now()
        with atomic_change(self):
            if is_default:
                self._clear_default()
            address = Address(is_default=bool(is_default), created_at=now, updated_at=now, **fields)
            self.add_addresses(address)
            self.updated_at = now

        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                is_default=address.is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **fields):
        address = self.address(address_id)

        with atomic_change(self):
            for field, value in fields.items():
                if value is not None:
                    setattr(address, field, value)
            if is_default:
                self._clear_default()
                address.is_default = True
            elif is_default is False:
                address.is_default = False
            address.updated_at = datetime.now()
            self.updated_at = address.updated_at

    def set_default_address(self, address_id):
        from storefront.user.events import DefaultAddressChanged

        address = self.address(address_id)
        previous = next((a for a in self.addresses if a.is_active and a.is_default), None)

        with atomic_change(self):
            self._clear_default()
            address.is_default = True
            address.updated_at = datetime.now()
            self.updated_at = address.updated_at

        self.raise_(
            DefaultAddressChanged(
                user_id=self.id,
                address_id=address.id,
                previous_default_address_id=previous.id if previous else None,
            )
        )

    def remove_address(self, address_id):
        address = self.address(address_id)
        address.is_active = False
        address.is_default = False
        address.updated_at = datetime.now()
        self.updated_at = address.updated_at

    def _clear_default(self):
        for other in self.addresses:
            if other.is_active and other.is_default:
                other.is_default = False


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_google_id(self, google_id):
        return self._dao.query.filter(google_id=google_id).all().first

    def find_by_email(self, email):
        return self._dao.query.filter(email=email).all().first
