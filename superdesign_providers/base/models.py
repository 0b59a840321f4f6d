"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-module implementations under
``superdesign_providers.base.models_parts``.
"""

from .models_parts.turn import Turn, Role
from .models_parts.query_options import QueryOptions
from .models_parts.canonical_message import CanonicalMessage

__all__ = [
    "Turn",
    "Role",
    "QueryOptions",
    "CanonicalMessage",
]
