"""Tag management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shared.errors import ConflictError
from storefront.shared.slug import slugify
from storefront.tag.tag import Tag


@storefront.command(part_of="Tag")
class CreateTag:
    name: String(required=True, max_length=50)
    color: String(max_length=7)


@storefront.command(part_of="Tag")
class UpdateTag:
    tag_id: Identifier(required=True)
    name: String(max_length=50)
    color: String(max_length=7)
    is_active: Boolean()


@storefront.command(part_of="Tag")
class DeactivateTag:
    tag_id: Identifier(required=True)


def _ensure_unique(repo, name, exclude_id=None):
    existing = repo.find_by_name_or_slug(name, slugify(name))
    if existing is not None and existing.id != exclude_id:
        raise ConflictError({"name": [f"A tag named '{name}' already exists"]})


@storefront.command_handler(part_of=Tag)
class ManageTagsHandler:
    @handle(CreateTag)
    def create_tag(self, command):
        repo = current_domain.repository_for(Tag)
        _ensure_unique(repo, command.name)

        tag = Tag.create(name=command.name, color=command.color)
        repo.add(tag)
        return str(tag.id)

    @handle(UpdateTag)
    def update_tag(self, command):
        repo = current_domain.repository_for(Tag)
        tag = repo.get(command.tag_id)
        if command.name is not None:
            _ensure_unique(repo, command.name, exclude_id=tag.id)

        tag.update_details(name=command.name, color=command.color, is_active=command.is_active)
        repo.add(tag)

    @handle(DeactivateTag)
    def deactivate_tag(self, command):
        repo = current_domain.repository_for(Tag)
        tag = repo.get(command.tag_id)
        tag.deactivate()
        repo.add(tag)
