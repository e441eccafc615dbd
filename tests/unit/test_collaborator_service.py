"""
Unit tests for CollaboratorService

Tests:
- Owner-only invitations and removals
- Duplicate and unknown-user handling
- Listing follows the project read rule
- Roles grant read access only
"""

import pytest
from uuid import uuid4

from scenevault.core.exceptions import (
    AccessDeniedError,
    DuplicateError,
    NotFoundError,
    UnauthenticatedError
)
from scenevault.schemas.project import ProjectUpdate
from scenevault.services.collaborator_service import CollaboratorService
from scenevault.services.project_service import ProjectService


@pytest.fixture
def service(db_session, feed):
    return CollaboratorService(db_session, feed)


@pytest.mark.unit
class TestCollaboratorService:

    def test_owner_adds_collaborator(self, service, project, owner, editor):
        row = service.add_collaborator(owner.id, project.id, editor.id, "editor")

        assert row.role == "editor"
        assert row.invited_by == owner.id
        assert row.joined_at is not None

    def test_default_role_is_viewer(self, service, project, owner, editor):
        assert service.add_collaborator(owner.id, project.id, editor.id).role == "viewer"

    def test_requires_caller(self, service, project, editor):
        with pytest.raises(UnauthenticatedError):
            service.add_collaborator(None, project.id, editor.id)

    def test_non_owner_cannot_invite(self, service, project, stranger, editor):
        with pytest.raises(AccessDeniedError):
            service.add_collaborator(stranger.id, project.id, editor.id)

    def test_editor_cannot_invite(self, service, project, owner, editor, stranger):
        service.add_collaborator(owner.id, project.id, editor.id, "editor")

        with pytest.raises(AccessDeniedError):
            service.add_collaborator(editor.id, project.id, stranger.id)

    def test_unknown_user(self, service, project, owner):
        with pytest.raises(NotFoundError):
            service.add_collaborator(owner.id, project.id, uuid4())

    def test_owner_cannot_be_added(self, service, project, owner):
        with pytest.raises(DuplicateError):
            service.add_collaborator(owner.id, project.id, owner.id)

    def test_duplicate_rejected(self, service, project, owner, editor):
        service.add_collaborator(owner.id, project.id, editor.id)

        with pytest.raises(DuplicateError):
            service.add_collaborator(owner.id, project.id, editor.id, "editor")

    def test_list_visible_to_collaborator(self, service, project, owner, editor):
        service.add_collaborator(owner.id, project.id, editor.id)

        [row] = service.list_collaborators(editor.id, project.id)

        assert row.user_id == editor.id

    def test_list_hidden_from_stranger(self, service, project, stranger):
        with pytest.raises(AccessDeniedError):
            service.list_collaborators(stranger.id, project.id)

    def test_editor_role_grants_read_not_write(self, db_session, storage, service, project, owner, editor):
        service.add_collaborator(owner.id, project.id, editor.id, "editor")
        projects = ProjectService(db_session, storage)

        assert projects.get_project(editor.id, project.id).id == project.id
        with pytest.raises(AccessDeniedError):
            projects.update_project(editor.id, project.id, ProjectUpdate(name="Edited"))

    def test_remove_revokes_read(self, db_session, storage, service, project, owner, editor):
        service.add_collaborator(owner.id, project.id, editor.id)

        service.remove_collaborator(owner.id, project.id, editor.id)

        with pytest.raises(AccessDeniedError):
            ProjectService(db_session, storage).get_project(editor.id, project.id)

    def test_remove_unknown_collaborator(self, service, project, owner, editor):
        with pytest.raises(AccessDeniedError):
            service.remove_collaborator(owner.id, project.id, editor.id)

    def test_publishes_events(self, service, project, owner, editor, mock_redis):
        service.add_collaborator(owner.id, project.id, editor.id)
        service.remove_collaborator(owner.id, project.id, editor.id)

        assert mock_redis.publish.call_count == 2
