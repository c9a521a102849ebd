"""
Workspace Storage Package

File-backed implementation of the workspace store and expense export.
"""

from .export import expenses_to_dataframe, write_expenses_csv
from .json_store import AccessDeniedError, JsonWorkspaceStore, SplitDetailsError, validate_split_details

__all__ = [
    "AccessDeniedError",
    "JsonWorkspaceStore",
    "SplitDetailsError",
    "expenses_to_dataframe",
    "validate_split_details",
    "write_expenses_csv",
]
