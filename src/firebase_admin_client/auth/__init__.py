"""Auth public exports."""

from .models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions

__all__ = [
    "ListUsersOptions",
    "ExportedUserRecord",
    "ExportedUserRecords",
]
