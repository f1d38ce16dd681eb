"""Application layer - session state and document configuration."""

from .session import PlanogramError, PlanogramSession

__all__ = [
    "PlanogramError",
    "PlanogramSession",
]
