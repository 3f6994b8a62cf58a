"""Utility for resolving church names to IDs."""

from churchbooks.domain.church import ChurchService
from churchbooks.domain.errors import NotFoundError, church_not_found


def resolve_church(church_service: ChurchService, church: str | int, pastorate_name: str | None = None) -> int:
    """Resolve church name or ID to church ID.

    Args:
        church_service: ChurchService instance
        church: Church name (str) or ID (int or string representation of int)
        pastorate_name: Restrict name lookup to this pastorate

    Returns:
        Church ID

    Raises:
        NotFoundError: If church is not found
    """
    if isinstance(church, int):
        if church_service.get_church(church) is None:
            raise NotFoundError(church_not_found(church))
        return church

    # Try to parse as integer (handles string IDs like "1")
    try:
        church_id = int(church)
    except (ValueError, TypeError):
        church_id = None
    if church_id is not None:
        if church_service.get_church(church_id) is None:
            raise NotFoundError(church_not_found(church_id))
        return church_id

    # Try to find by name
    for candidate in church_service.list_churches(pastorate_name):
        if candidate.name.lower() == church.strip().lower():
            return candidate.id

    raise NotFoundError(church_not_found(church))
