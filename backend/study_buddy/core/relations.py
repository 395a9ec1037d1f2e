"""
Helpers for attaching related user summaries to rows.

PostgREST embeds depend on foreign-key names, so related users are fetched
in one extra query and stitched in here.
"""

from supabase import Client

USER_SUMMARY_COLUMNS = "id, name, email"


def fetch_user_summaries(db: Client, user_ids) -> dict[str, dict]:
    """Map user id -> {id, name, email} for the given ids (missing ids are skipped)."""
    ids = sorted({uid for uid in user_ids if uid})
    if not ids:
        return {}
    result = db.table("users").select(USER_SUMMARY_COLUMNS).in_("id", ids).execute()
    return {row["id"]: row for row in result.data}


def attach_users(db: Client, rows: list[dict], fields: dict[str, str]) -> list[dict]:
    """Attach user summaries in place.

    Args:
        rows: Records to enrich.
        fields: Foreign-key column -> output key, e.g. {"student_id": "student"}.
    """
    users = fetch_user_summaries(
        db, (row.get(column) for row in rows for column in fields)
    )
    for row in rows:
        for column, key in fields.items():
            row[key] = users.get(row.get(column))
    return rows
