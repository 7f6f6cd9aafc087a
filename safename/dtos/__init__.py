"""Data transfer objects for the naming toolkit."""

from safename.dtos.naming_options import NamingOptions
from safename.dtos.rename_result import RenameResult

__all__ = [
    "NamingOptions",
    "RenameResult",
]
