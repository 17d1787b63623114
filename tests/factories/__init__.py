"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory
"""

from tests.factories.base import BaseFactory, days_from_today, generate_uuid, utc_now
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "days_from_today",
    "generate_uuid",
    "utc_now",
    # Project
    "ProjectFactory",
]
