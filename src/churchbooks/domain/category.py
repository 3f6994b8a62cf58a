"""Offertory category domain service."""

from churchbooks.database.base import Database
from churchbooks.domain.entities import OffertoryCategory
from churchbooks.domain.errors import ValidationError, missing_pastorate


class CategoryService:
    """Service for managing offertory categories of a pastorate."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, pastorate_name: str, name: str) -> int:
        """Create an offertory category.

        Returns:
            Category ID

        Raises:
            ValidationError: If name or pastorate is blank
            ConflictError: If the category already exists
        """
        if not (pastorate_name or "").strip():
            raise ValidationError(missing_pastorate())
        if not (name or "").strip():
            raise ValidationError("Category name is required")
        return self.db.create_offertory_category(pastorate_name.strip(), name.strip())

    def list_categories(self, pastorate_name: str) -> list[OffertoryCategory]:
        return self.db.list_offertory_categories(pastorate_name)

    def require_category_by_name(self, pastorate_name: str, name: str) -> OffertoryCategory:
        """Get an offertory category by name (case-insensitive) or ID.

        Raises:
            ValidationError: If no such category exists
        """
        categories = self.list_categories(pastorate_name)
        for category in categories:
            if category.name.lower() == name.strip().lower() or str(category.id) == name.strip():
                return category
        raise ValidationError(f"Offertory category '{name}' not found in {pastorate_name}")

    def category_names(self, pastorate_name: str) -> dict[int, str]:
        """Map of category ID to name, for itemised service display."""
        return {c.id: c.name for c in self.list_categories(pastorate_name)}
