"""
Record lookups with the shared error precedence: existence first, then ownership.
"""

import uuid

from supabase import Client

from study_buddy.core.exceptions import ForbiddenError, NotFoundError


def is_uuid(value) -> bool:
    """Ids are uuid columns; anything else can never match a row."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def fetch_record(db: Client, table: str, record_id: str, entity: str) -> dict:
    """Fetch a row by id or raise NotFoundError("<entity> not found")."""
    if not is_uuid(record_id):
        raise NotFoundError(f"{entity} not found")
    result = db.table(table).select("*").eq("id", record_id).execute()
    if not result.data:
        raise NotFoundError(f"{entity} not found")
    return result.data[0]


def fetch_owned(
    db: Client,
    table: str,
    record_id: str,
    user_id: str,
    entity: str,
    owner_column: str = "user_id",
) -> dict:
    """Fetch a row the user owns.

    Raises:
        NotFoundError: If no row has this id.
        ForbiddenError: If the row exists but belongs to someone else.
    """
    record = fetch_record(db, table, record_id, entity)
    if record.get(owner_column) != user_id:
        raise ForbiddenError()
    return record
