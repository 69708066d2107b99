# core/errors.py

from fastapi import HTTPException


# ============================================================
# Programmer / logic errors
# ============================================================
class InvalidArgument(TypeError):
    """
    Raised when a caller passes a malformed argument to the permission
    or selection core (non-string permission name, unknown level, etc.).
    Never expected at runtime in correctly wired code.
    """


class PreconditionViolation(RuntimeError):
    """
    Raised when an operation is attempted from a state that forbids it,
    e.g. selecting a value on a locked selection level.
    """


def programmer_error(error: Exception) -> HTTPException:
    """
    Convert a core logic error into an HTTPException for API callers.
      • InvalidArgument       → 422
      • PreconditionViolation → 409
    """
    if isinstance(error, PreconditionViolation):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=422, detail=str(error))


# ============================================================
# Supabase errors
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Supabase Auth / GoTrue errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Supabase errors with args (common)
    if error.args:
        return str(error.args[0])

    return str(error) or "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what operation failed (e.g., "Failed to create role")
        status_code: HTTP status code (default 500)

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    # Provide user-friendly messages for common errors
    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
