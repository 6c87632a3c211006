"""Persistence collaborators for the assignment engine."""

from hta_directory.store.base import AssignmentStore
from hta_directory.store.sqlite import SQLiteAssignmentStore

__all__ = ["AssignmentStore", "SQLiteAssignmentStore"]
