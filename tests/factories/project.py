"""Project factory for test data generation."""

from datetime import timedelta

from polyfactory import Use

from src.studio.models import Brand, Project, ProjectStatus, ProjectType
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data."""

    __model__ = Project

    id = Use(generate_uuid)
    title = Use(lambda: f"Weekend Flyer {generate_uuid().hex[-6:]}")
    brand = Brand.WAMI_LIVE.value
    type = ProjectType.FLYER.value
    description = "Flyer for the weekend tournament"
    deadline = Use(lambda: utc_now() + timedelta(days=7))
    priority = 1
    status = ProjectStatus.PENDING.value
    created_at = Use(utc_now)
    files = Use(list)

    @classmethod
    def in_progress(cls, **kwargs):
        """Create a project someone is working on."""
        return cls.build(status=ProjectStatus.IN_PROGRESS.value, **kwargs)

    @classmethod
    def completed(cls, **kwargs):
        """Create a Completed project."""
        return cls.build(status=ProjectStatus.COMPLETED.value, **kwargs)

    @classmethod
    def ranked(cls, count: int, **kwargs) -> list[Project]:
        """Create ``count`` active projects with priorities 1..count."""
        return [cls.build(priority=i, **kwargs) for i in range(1, count + 1)]
