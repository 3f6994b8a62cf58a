"""Church domain service."""

from typing import Optional
from churchbooks.database.base import Database
from churchbooks.domain.entities import Church as ChurchEntity
from churchbooks.domain.errors import ConflictError, ValidationError, missing_pastorate


class ChurchService:
    """Service for managing the churches of a pastorate."""

    def __init__(self, db: Database):
        """Initialize church service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_church(self, name: str, pastorate_name: str) -> int:
        """Create a new church.

        Args:
            name: Church name
            pastorate_name: Pastorate the church belongs to

        Returns:
            Church ID

        Raises:
            ValidationError: If name or pastorate is blank
            ConflictError: If the pastorate already has a church with this name
        """
        name = (name or "").strip()
        pastorate_name = (pastorate_name or "").strip()
        if not name:
            raise ValidationError("Church name is required")
        if not pastorate_name:
            raise ValidationError(missing_pastorate())

        for church in self.db.list_churches(pastorate_name):
            if church.name == name:
                raise ConflictError(f"Church '{name}' already exists in {pastorate_name}")

        return self.db.create_church(name=name, pastorate_name=pastorate_name)

    def get_church(self, church_id: int) -> Optional[ChurchEntity]:
        """Get church by ID.

        Args:
            church_id: Church ID

        Returns:
            Church entity or None if not found
        """
        return self.db.get_church(church_id)

    def list_churches(self, pastorate_name: Optional[str] = None) -> list[ChurchEntity]:
        """List churches in display order.

        Args:
            pastorate_name: Optional pastorate to filter by

        Returns:
            List of church entities
        """
        return self.db.list_churches(pastorate_name)

    def list_pastorates(self) -> list[str]:
        """Names of all pastorates that have at least one church."""
        return sorted({church.pastorate_name for church in self.db.list_churches()})
