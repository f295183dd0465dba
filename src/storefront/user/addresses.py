"""Address book management: commands and handler.

Every command loads the whole User aggregate and saves it back in one unit of
work, so clearing the previous default and setting the new one commit together.
"""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class AddAddress:
    user_id: Identifier(required=True)
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


@storefront.command(part_of="User")
class UpdateAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    alias: String(max_length=50)
    full_name: String(max_length=100)
    phone: String(max_length=20)
    state: String(max_length=100)
    city: String(max_length=100)
    municipality: String(max_length=100)
    address_line: String(max_length=500)
    zip_code: String(max_length=20)
    reference: String(max_length=500)
    is_default: Boolean()


@storefront.command(part_of="User")
class SetDefaultAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


_ADDRESS_FIELDS = (
    "alias",
    "full_name",
    "phone",
    "state",
    "city",
    "municipality",
    "address_line",
    "zip_code",
    "reference",
)


@storefront.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            is_default=command.is_default,
            **{field: getattr(command, field) for field in _ADDRESS_FIELDS},
        )
        repo.add(user)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_address(
            command.address_id,
            is_default=command.is_default,
            **{field: getattr(command, field) for field in _ADDRESS_FIELDS},
        )
        repo.add(user)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_address(command.address_id)
        repo.add(user)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)
