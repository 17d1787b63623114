"""Tests for ProjectService business rules.

The repository and image store are in-memory fakes; the session is an
AsyncMock so commit/rollback calls can be asserted.
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.atogato.core.exceptions import FieldValidationError, ForbiddenError, NotFoundError
from src.atogato.models.base import utc_today
from src.atogato.schemas.project import ProjectCreate, ProjectReplace, ProjectUpdate
from src.atogato.services import ImageUpload, ProjectService
from src.atogato.services.project_service import check_deadlines, ensure_owner
from tests.factories import ProjectFactory, days_from_today
from tests.fakes import FakeImageStore, InMemoryProjectRepository

pytestmark = pytest.mark.unit


def create_input(**overrides) -> ProjectCreate:
    payload = {
        "name": "Harbour mural",
        "category": "PAINTING",
        "location": "Busan",
        "project_deadline": days_from_today(60),
        "application_deadline": days_from_today(30),
        "required_categories": ["PAINTER", "PHOTOGRAPHER"],
        "description": "Paint the harbour wall together.",
    }
    payload.update(overrides)
    return ProjectCreate(**payload)


class TestEnsureOwner:
    def test_owner_allowed(self, owner):
        ensure_owner(owner, ProjectFactory.build(owner_id=owner.id))

    def test_non_owner_forbidden(self, stranger):
        with pytest.raises(ForbiddenError):
            ensure_owner(stranger, ProjectFactory.build())


class TestCheckDeadlines:
    def test_same_day_allowed(self):
        check_deadlines(date(2030, 1, 1), date(2030, 1, 1))

    def test_application_after_project_rejected(self):
        with pytest.raises(FieldValidationError) as exc_info:
            check_deadlines(date(2030, 1, 2), date(2030, 1, 1))
        assert exc_info.value.field == "application_deadline"


class TestCreateProject:
    """Creating projects."""

    async def test_sets_owner_and_derived_fields(self, project_service, project_repo, owner):
        result = await project_service.create_project(owner, create_input(required_people=7))

        project = result.project
        assert project.owner_id == owner.id
        assert project.required_people == 2
        assert project.liked == 0
        assert project.created_date == utc_today()
        assert project.images == []
        assert result.image_uploads == []
        assert project_repo.projects == [project]

    async def test_commits_and_refreshes(self, project_service, mock_session, owner):
        result = await project_service.create_project(owner, create_input())

        mock_session.commit.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(result.project)

    async def test_duplicate_categories_count_once(self, project_service, owner):
        data = create_input(required_categories=["PAINTER", "PAINTER", "WRITER"])

        result = await project_service.create_project(owner, data)

        assert result.project.required_categories == ["PAINTER", "WRITER"]
        assert result.project.required_people == 2

    async def test_deadline_order_rejected_before_upload(
        self, project_service, image_store, project_repo, owner
    ):
        data = create_input(
            application_deadline=days_from_today(40),
            project_deadline=days_from_today(10),
        )
        uploads = [ImageUpload("a.png", b"png-bytes")]

        with pytest.raises(FieldValidationError):
            await project_service.create_project(owner, data, uploads)

        assert image_store.stored == []
        assert project_repo.projects == []

    async def test_images_kept_in_upload_order(self, project_service, image_store, owner):
        uploads = [
            ImageUpload("first.png", b"1", "image/png"),
            ImageUpload("second.jpg", b"2", "image/jpeg"),
        ]

        result = await project_service.create_project(owner, create_input(), uploads)

        assert [img["position"] for img in result.project.images] == [0, 1]
        assert [name for name, _, _ in image_store.stored] == ["first.png", "second.jpg"]
        assert all(r.ok for r in result.image_uploads)
        assert result.project.images[0]["url"] == result.image_uploads[0].url

    async def test_failed_image_is_skipped_and_reported(
        self, project_repo, mock_session, owner
    ):
        store = FakeImageStore(failing={"broken.png"})
        service = ProjectService(project_repo, store, mock_session)
        uploads = [
            ImageUpload("ok.png", b"1"),
            ImageUpload("broken.png", b"2"),
            ImageUpload("also-ok.png", b"3"),
        ]

        result = await service.create_project(owner, create_input(), uploads)

        assert len(result.project.images) == 2
        assert [img["position"] for img in result.project.images] == [0, 1]
        outcome = {r.filename: r for r in result.image_uploads}
        assert outcome["broken.png"].ok is False
        assert "bucket unavailable" in outcome["broken.png"].error
        assert outcome["ok.png"].ok and outcome["also-ok.png"].ok

    async def test_empty_and_oversized_images_rejected(self, project_service, owner):
        uploads = [ImageUpload("empty.png", b""), ImageUpload("huge.png", b"x" * 2048)]

        result = await project_service.create_project(owner, create_input(), uploads)

        assert result.project.images == []
        assert [r.ok for r in result.image_uploads] == [False, False]

    async def test_rollback_on_commit_failure(self, project_service, mock_session, owner):
        mock_session.commit.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await project_service.create_project(owner, create_input())

        mock_session.rollback.assert_awaited_once()


class TestRetrieval:
    async def test_get_missing_project(self, project_service):
        with pytest.raises(NotFoundError):
            await project_service.get_project(uuid4())

    async def test_list_projects_returns_all(self, project_repo, project_service):
        project_repo.projects = ProjectFactory.batch(3)

        assert await project_service.list_projects() == project_repo.projects

    async def test_list_recent_newest_first(self, project_repo, project_service):
        old = ProjectFactory.build(created_date=days_from_today(-5))
        new = ProjectFactory.build(created_date=days_from_today(0))
        project_repo.projects = [old, new]

        assert await project_service.list_recent() == [new, old]

    async def test_list_upcoming_filters_and_orders(self, project_repo, project_service):
        closed = ProjectFactory.expired()
        closes_today = ProjectFactory.build(
            application_deadline=days_from_today(0), project_deadline=days_from_today(5)
        )
        later = ProjectFactory.build(application_deadline=days_from_today(20))
        soon_quiet = ProjectFactory.build(application_deadline=days_from_today(3), liked=1)
        soon_popular = ProjectFactory.build(application_deadline=days_from_today(3), liked=9)
        project_repo.projects = [closed, closes_today, later, soon_quiet, soon_popular]

        upcoming = await project_service.list_upcoming()

        assert upcoming == [soon_popular, soon_quiet, later]


class TestReplaceProject:
    async def test_replaces_mutable_fields(self, project_repo, project_service, owner):
        project = ProjectFactory.build(owner_id=owner.id, liked=4)
        images = list(project.images)
        project_repo.projects = [project]
        data = ProjectReplace(
            **create_input(
                name="New name", required_categories=["WRITER"], remote_status="remote"
            ).model_dump()
        )

        updated = await project_service.replace_project(owner, project.id, data)

        assert updated.name == "New name"
        assert updated.required_categories == ["WRITER"]
        assert updated.required_people == 1
        assert updated.remote_status == "remote"
        assert updated.liked == 4
        assert updated.images == images
        assert updated.owner_id == owner.id

    async def test_non_owner_forbidden(self, project_repo, project_service, mock_session, stranger):
        project = ProjectFactory.build()
        project_repo.projects = [project]
        data = ProjectReplace(**create_input().model_dump())

        with pytest.raises(ForbiddenError):
            await project_service.replace_project(stranger, project.id, data)

        mock_session.commit.assert_not_awaited()


class TestUpdateProject:
    """Sparse updates."""

    async def test_only_location_changes(self, project_repo, project_service, owner):
        project = ProjectFactory.build(owner_id=owner.id, location="Seoul")
        before = project.model_dump(exclude={"location", "updated_at"})
        project_repo.projects = [project]

        updated = await project_service.update_project(
            owner, project.id, ProjectUpdate(location="Busan")
        )

        assert updated.location == "Busan"
        assert updated.model_dump(exclude={"location", "updated_at"}) == before

    async def test_categories_recompute_required_people(
        self, project_repo, project_service, owner
    ):
        project = ProjectFactory.build(owner_id=owner.id)
        project_repo.projects = [project]
        data = ProjectUpdate(
            required_categories=["WRITER", "ACTOR", "DANCER"], required_people=10
        )

        updated = await project_service.update_project(owner, project.id, data)

        assert updated.required_people == 3

    async def test_merged_deadlines_checked(
        self, project_repo, project_service, mock_session, owner
    ):
        project = ProjectFactory.build(
            owner_id=owner.id,
            application_deadline=days_from_today(10),
            project_deadline=days_from_today(20),
        )
        project_repo.projects = [project]

        with pytest.raises(FieldValidationError):
            await project_service.update_project(
                owner, project.id, ProjectUpdate(application_deadline=days_from_today(21))
            )

        assert project.application_deadline == days_from_today(10)
        mock_session.commit.assert_not_awaited()

    async def test_empty_update_does_not_commit(
        self, project_repo, project_service, mock_session, owner
    ):
        project = ProjectFactory.build(owner_id=owner.id)
        project_repo.projects = [project]

        await project_service.update_project(owner, project.id, ProjectUpdate())

        mock_session.commit.assert_not_awaited()

    async def test_missing_project(self, project_service, owner):
        with pytest.raises(NotFoundError):
            await project_service.update_project(owner, uuid4(), ProjectUpdate(name="x"))


class TestDeleteProject:
    async def test_owner_deletes(self, project_repo, project_service, mock_session, owner):
        project = ProjectFactory.build(owner_id=owner.id)
        project_repo.projects = [project]

        await project_service.delete_project(owner, project.id)

        assert project_repo.projects == []
        mock_session.commit.assert_awaited_once()

    async def test_non_owner_leaves_project(self, project_repo, project_service, stranger):
        project = ProjectFactory.build()
        project_repo.projects = [project]

        with pytest.raises(ForbiddenError):
            await project_service.delete_project(stranger, project.id)

        assert await project_service.get_project(project.id) is project

    async def test_rollback_on_failure(self, project_service, mock_session, owner):
        repo = InMemoryProjectRepository([ProjectFactory.build(owner_id=owner.id)])
        repo.delete = AsyncMock(side_effect=RuntimeError("db down"))
        service = ProjectService(repo, FakeImageStore(), mock_session)

        with pytest.raises(RuntimeError):
            await service.delete_project(owner, repo.projects[0].id)

        mock_session.rollback.assert_awaited_once()
