"""Repository for Project entity."""

from datetime import date

from sqlmodel import select

from src.atogato.models import Project
from src.atogato.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List all projects in storage order."""
        result = await self.session.execute(select(Project))
        return list(result.scalars().all())

    async def list_by_created_date_desc(self) -> list[Project]:
        """List projects newest first.

        Projects created on the same day keep insertion order.
        """
        query = select(Project).order_by(
            Project.created_date.desc(),  # type: ignore[attr-defined]
            Project.created_at.asc(),  # type: ignore[attr-defined]
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_application_deadline_after(self, day: date) -> list[Project]:
        """List projects still accepting applications after ``day``.

        Sorted by soonest application deadline, then most liked.
        """
        query = (
            select(Project)
            .where(Project.application_deadline > day)
            .order_by(
                Project.application_deadline.asc(),  # type: ignore[attr-defined]
                Project.liked.desc(),  # type: ignore[attr-defined]
                Project.created_at.asc(),  # type: ignore[attr-defined]
            )
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
