"""Model DTO parts (one class per module)."""

from .turn import Turn, Role
from .query_options import QueryOptions
from .canonical_message import CanonicalMessage

__all__ = ["Turn", "Role", "QueryOptions", "CanonicalMessage"]
