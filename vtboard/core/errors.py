"""
Board error taxonomy.

Every error a user action can run into is one of these. Routes and services
raise them; the handlers registered in ``vtboard.main`` turn them into a
flash message plus a redirect back to the board.
"""

from typing import Optional


class BoardError(Exception):
    """Base class for errors surfaced to the user as a notification."""

    message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ConfigurationMissing(BoardError):
    message = "Supabase settings are empty. Set SUPABASE_URL and SUPABASE_KEY before starting the board."

    def __init__(self, missing):
        super().__init__(f"{self.message} Missing: {', '.join(missing)}")
        self.missing = list(missing)


class LoginRequired(BoardError):
    message = "Please sign in first."


class ValidationFailed(BoardError):
    message = "A required field is empty."


class RemoteOperationFailed(BoardError):
    message = "The request failed. Check your permissions or the row-level security policy."
