"""Sign-in and profile management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import Role, User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class SignInWithGoogle:
    """Create or refresh the user behind a verified Google identity."""

    google_id: String(required=True, max_length=255)
    email: String(required=True, max_length=255)
    name: String(max_length=150)
    avatar: String(max_length=500)


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=150)
    nickname: String(max_length=50)
    phone: String(max_length=20)


@storefront.command(part_of="User")
class ChangeUserRole:
    email: String(required=True, max_length=255)
    role: String(required=True, choices=Role)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(SignInWithGoogle)
    def sign_in(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_google_id(command.google_id)

        if user is None:
            user = User.register(
                email=command.email,
                google_id=command.google_id,
                name=command.name,
                avatar=command.avatar,
            )
            created = True
        else:
            user.refresh_identity(email=command.email, name=command.name, avatar=command.avatar)
            created = False

        repo.add(user)
        logger.info("user_signed_in", user_id=str(user.id), created=created)
        return str(user.id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(name=command.name, nickname=command.nickname, phone=command.phone)
        repo.add(user)

    @handle(ChangeUserRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError({"email": [f"No user with email {command.email}"]})

        user.role = command.role
        repo.add(user)
        logger.info("user_role_changed", user_id=str(user.id), role=command.role)
        return str(user.id)
