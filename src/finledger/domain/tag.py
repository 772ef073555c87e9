"""Tag domain service."""

from typing import Optional

from finledger.database.base import Database
from finledger.domain.entities import Tag
from finledger.domain.errors import ConflictError, NotFoundError, ValidationError


class TagService:
    """Service for managing transaction tags."""

    def __init__(self, db: Database, owner_id: Optional[str] = None):
        self.db = db
        self.owner_id = owner_id

    def create_tag(self, name: str, color: Optional[str] = None) -> int:
        """Create a tag.

        Args:
            name: Tag name, unique per owner
            color: Optional display color

        Returns:
            Tag ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the owner already has a tag with this name
        """
        if not name or not name.strip():
            raise ValidationError("Tag name cannot be empty")
        if self.db.get_tag_by_name(name, owner_id=self.owner_id) is not None:
            raise ConflictError(f"Tag '{name}' already exists")
        return self.db.create_tag(name=name.strip(), color=color, owner_id=self.owner_id)

    def get_or_create_tag(self, name: str) -> Tag:
        """Return the owner's tag with this name, creating it when missing."""
        tag = self.db.get_tag_by_name(name, owner_id=self.owner_id)
        if tag is None:
            self.create_tag(name)
            tag = self.db.get_tag_by_name(name, owner_id=self.owner_id)
        return tag

    def require_tag(self, name: str) -> Tag:
        tag = self.db.get_tag_by_name(name, owner_id=self.owner_id)
        if tag is None:
            raise NotFoundError(f"Tag '{name}' not found")
        return tag

    def list_tags(self) -> list[Tag]:
        return self.db.list_tags(owner_id=self.owner_id)
