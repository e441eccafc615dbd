"""
Unit tests for ProjectService

Tests:
- Listing (ownership filter, ordering, unauthenticated)
- Read rule (owner, collaborator, public, stranger)
- Creation with the default scene
- Partial updates and last_modified refresh
- Transactional cascade delete
- Upload targets
- Change feed publishing
"""

import json
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from uuid import uuid4

from scenevault.core.exceptions import AccessDeniedError, UnauthenticatedError
from scenevault.models import Project, SceneModel, Material, Collaborator
from scenevault.schemas.project import ProjectUpdate
from scenevault.services.project_service import ProjectService


@pytest.fixture
def service(db_session, storage, feed):
    return ProjectService(db_session, storage, feed)


@pytest.mark.unit
class TestListProjects:

    def test_unauthenticated_gets_empty_list(self, service, project):
        assert service.list_projects(None) == []

    def test_only_own_projects(self, service, project, owner, stranger):
        service.create_project(stranger.id, "Stranger's Garage")

        names = [p.name for p in service.list_projects(owner.id)]

        assert names == ["Living Room"]

    def test_shared_projects_not_listed(self, service, project, editor, add_collaborator_row):
        add_collaborator_row(project, editor)

        assert service.list_projects(editor.id) == []

    def test_newest_last_modified_first(self, db_session, service, owner):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for offset, name in [(1, "middle"), (2, "newest"), (0, "oldest")]:
            db_session.add(Project(
                user_id=owner.id,
                name=name,
                scene_data="{}",
                last_modified=base + timedelta(days=offset)
            ))
        db_session.commit()

        names = [p.name for p in service.list_projects(owner.id)]

        assert names == ["newest", "middle", "oldest"]

    def test_thumbnail_url_resolved(self, db_session, service, storage, project, owner):
        thumb_id = storage.new_storage_id()
        storage.save(thumb_id, b"\x89PNG", "image/png")
        project.thumbnail = thumb_id
        db_session.commit()

        [listed] = service.list_projects(owner.id)

        assert listed.thumbnail_url == f"http://testserver/api/v1/storage/files/{thumb_id}"

    def test_thumbnail_url_none_without_thumbnail(self, service, project, owner):
        [listed] = service.list_projects(owner.id)

        assert listed.thumbnail_url is None


@pytest.mark.unit
class TestGetProject:

    def test_owner_reads(self, service, project, owner):
        assert service.get_project(owner.id, project.id).id == project.id

    def test_collaborator_reads(self, service, project, editor, add_collaborator_row):
        add_collaborator_row(project, editor, role="viewer")

        assert service.get_project(editor.id, project.id).id == project.id

    def test_public_project_readable(self, db_session, service, project, stranger):
        project.is_public = True
        db_session.commit()

        assert service.get_project(stranger.id, project.id).id == project.id

    def test_private_project_hidden_from_stranger(self, service, project, stranger):
        with pytest.raises(AccessDeniedError) as hidden:
            service.get_project(stranger.id, project.id)
        with pytest.raises(AccessDeniedError) as missing:
            service.get_project(stranger.id, uuid4())

        assert hidden.value.message == missing.value.message

    def test_unauthenticated_always_not_found(self, db_session, service, project):
        project.is_public = True
        db_session.commit()

        with pytest.raises(AccessDeniedError):
            service.get_project(None, project.id)


@pytest.mark.unit
class TestCreateProject:

    def test_requires_caller(self, service):
        with pytest.raises(UnauthenticatedError):
            service.create_project(None, "Nope")

    def test_default_scene(self, service, owner):
        created = service.create_project(owner.id, "N")
        fetched = service.get_project(owner.id, created.id)

        scene = json.loads(fetched.scene_data)
        assert scene["environment"] == "studio"
        assert scene["grid"] == {"visible": True, "size": 10}
        assert scene["camera"] == {"position": [5, 5, 5], "target": [0, 0, 0]}
        assert scene["lighting"] == {"intensity": 1, "color": "#ffffff"}

    def test_new_project_is_private(self, service, owner):
        created = service.create_project(owner.id, "N", "desc")

        assert created.is_public is False
        assert created.user_id == owner.id
        assert created.description == "desc"
        assert created.thumbnail is None

    def test_publishes_event(self, service, owner, mock_redis):
        created = service.create_project(owner.id, "N")

        channel, payload = mock_redis.publish.call_args[0]
        assert channel == f"scenevault:project:{created.id}"
        assert json.loads(payload)["type"] == "project.created"


@pytest.mark.unit
class TestUpdateProject:

    def test_applies_only_provided_fields(self, db_session, service, project, owner):
        updated = service.update_project(owner.id, project.id, ProjectUpdate(name="Den"))

        assert updated.name == "Den"
        assert updated.description == "Furniture layout"
        assert updated.scene_data == project.scene_data

    def test_explicit_null_does_not_clear(self, service, project, owner):
        update = ProjectUpdate.model_validate({"description": None, "is_public": True})

        updated = service.update_project(owner.id, project.id, update)

        assert updated.description == "Furniture layout"
        assert updated.is_public is True

    def test_refreshes_last_modified_even_without_fields(self, db_session, service, project, owner):
        stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
        project.last_modified = stale
        db_session.commit()

        updated = service.update_project(owner.id, project.id, ProjectUpdate())

        assert updated.last_modified.replace(tzinfo=timezone.utc) > stale

    @pytest.mark.parametrize("role", ["owner", "editor", "viewer"])
    def test_collaborator_cannot_update(self, service, project, editor, add_collaborator_row, role):
        add_collaborator_row(project, editor, role=role)

        with pytest.raises(AccessDeniedError):
            service.update_project(editor.id, project.id, ProjectUpdate(name="Hijacked"))

    def test_unauthenticated_rejected(self, service, project):
        with pytest.raises(UnauthenticatedError):
            service.update_project(None, project.id, ProjectUpdate(name="x"))

    def test_missing_project(self, service, owner):
        with pytest.raises(AccessDeniedError):
            service.update_project(owner.id, uuid4(), ProjectUpdate(name="x"))


@pytest.mark.unit
class TestDeleteProject:

    def _seed(self, db_session, project, owner):
        for name in ("Sofa", "Lamp"):
            db_session.add(SceneModel(
                project_id=project.id, user_id=owner.id, name=name, file_id=uuid4().hex,
                file_type="glb", file_size=1, position=[0, 0, 0], rotation=[0, 0, 0], scale=[1, 1, 1]
            ))
        db_session.add(Material(project_id=project.id, user_id=owner.id, name="Oak", material_data="{}"))
        db_session.commit()

    def test_cascade_removes_models_and_materials(self, db_session, service, project, owner):
        self._seed(db_session, project, owner)
        project_id = project.id

        service.delete_project(owner.id, project_id)

        assert db_session.query(SceneModel).filter(SceneModel.project_id == project_id).count() == 0
        assert db_session.query(Material).filter(Material.project_id == project_id).count() == 0
        assert db_session.query(Project).filter(Project.id == project_id).first() is None
        with pytest.raises(AccessDeniedError):
            service.get_project(owner.id, project_id)

    def test_cascade_removes_collaborators(self, db_session, service, project, owner, editor, add_collaborator_row):
        add_collaborator_row(project, editor)
        project_id = project.id

        service.delete_project(owner.id, project_id)

        assert db_session.query(Collaborator).filter(Collaborator.project_id == project_id).count() == 0

    def test_other_projects_untouched(self, db_session, service, project, owner, scene_model):
        other = service.create_project(owner.id, "Kitchen")
        db_session.add(SceneModel(
            project_id=other.id, user_id=owner.id, name="Fridge", file_id=uuid4().hex,
            file_type="obj", file_size=1, position=[0, 0, 0], rotation=[0, 0, 0], scale=[1, 1, 1]
        ))
        db_session.commit()

        service.delete_project(owner.id, project.id)

        assert db_session.query(SceneModel).filter(SceneModel.project_id == other.id).count() == 1

    def test_non_owner_rejected_and_nothing_deleted(self, db_session, service, project, stranger, scene_model):
        with pytest.raises(AccessDeniedError):
            service.delete_project(stranger.id, project.id)

        assert db_session.query(SceneModel).filter(SceneModel.project_id == project.id).count() == 1

    def test_failure_rolls_back_whole_cascade(self, db_session, service, project, owner):
        self._seed(db_session, project, owner)
        project_id = project.id

        with patch.object(db_session, "commit", side_effect=RuntimeError("disk full")):
            with pytest.raises(RuntimeError):
                service.delete_project(owner.id, project_id)

        assert db_session.query(SceneModel).filter(SceneModel.project_id == project_id).count() == 2
        assert db_session.query(Material).filter(Material.project_id == project_id).count() == 1
        assert db_session.query(Project).filter(Project.id == project_id).first() is not None

    def test_stored_assets_survive(self, db_session, service, storage, project, owner):
        file_id = storage.new_storage_id()
        storage.save(file_id, b"glTF", "model/gltf-binary")
        db_session.add(SceneModel(
            project_id=project.id, user_id=owner.id, name="Sofa", file_id=file_id,
            file_type="glb", file_size=4, position=[0, 0, 0], rotation=[0, 0, 0], scale=[1, 1, 1]
        ))
        db_session.commit()

        service.delete_project(owner.id, project.id)

        assert storage.exists(file_id)


@pytest.mark.unit
class TestUploadTarget:

    def test_requires_caller(self, service):
        with pytest.raises(UnauthenticatedError):
            service.generate_upload_target(None)

    def test_issues_local_upload_url(self, service, owner):
        target = service.generate_upload_target(owner.id)

        assert target.method == "PUT"
        assert target.upload_url.startswith("http://testserver/api/v1/storage/uploads/")
        assert len(target.storage_id) == 32
