"""
Query helpers shared by the Supabase repositories.
"""

from postgrest.exceptions import APIError

from application.exceptions import ConflictError

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def escape_ilike(value: str) -> str:
    """Escape metacharacters in user input for safe use in PostgREST ILIKE filters.

    Backslash-escapes SQL ILIKE wildcards (``%``, ``_``, ``\\``) and strips
    PostgREST filter-syntax delimiters (``.``, ``,``, ``(`` and ``)``) to
    prevent filter injection via the ``.or_()`` method.
    """
    value = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    for delimiter in (",", ".", "(", ")"):
        value = value.replace(delimiter, " ")
    return value.strip()


def search_clause(columns, search: str) -> str:
    """Build an ``or`` filter matching the search text in any of the columns."""
    pattern = f"%{escape_ilike(search)}%"
    return ",".join(f"{column}.ilike.{pattern}" for column in columns)


def raise_for_unique_violation(error: APIError) -> None:
    """Translate a unique constraint violation into a ConflictError."""
    if getattr(error, "code", None) != UNIQUE_VIOLATION:
        return
    details = f"{error.message or ''} {error.details or ''}".lower()
    if "email" in details:
        raise ConflictError("Email already registered") from error
    if "username" in details:
        raise ConflictError("Username already exists") from error
    raise ConflictError() from error
