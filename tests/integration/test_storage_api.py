"""
Integration tests for Storage API endpoints

Tests:
- Upload through a signed target, then serve the file
- Single-use, tampered and oversized uploads
- Chunked bodies and racing uses of one token
"""

import pytest
from unittest.mock import patch


@pytest.mark.integration
class TestStorageAPI:
    """Integration tests for direct uploads and downloads"""

    def _target(self, client, headers):
        return client.post("/api/v1/projects/upload-target", headers=headers).json()

    def _path(self, upload_url):
        return upload_url.replace("http://testserver", "")

    def test_upload_then_place_model(self, client, project, owner, auth_headers):
        headers = auth_headers(owner)
        target = self._target(client, headers)

        uploaded = client.put(
            self._path(target["upload_url"]),
            content=b"glTF-binary-content",
            headers={"Content-Type": "model/gltf-binary"}
        )
        assert uploaded.status_code == 200
        assert uploaded.json() == {"storage_id": target["storage_id"]}

        added = client.post(
            f"/api/v1/projects/{project.id}/models",
            json={"name": "Sofa", "file_id": target["storage_id"], "file_type": "glb", "file_size": 19},
            headers=headers
        )
        file_url = added.json()["file_url"]
        assert file_url == f"http://testserver/api/v1/storage/files/{target['storage_id']}"

        downloaded = client.get(self._path(file_url))
        assert downloaded.status_code == 200
        assert downloaded.content == b"glTF-binary-content"

    def test_token_is_single_use(self, client, owner, auth_headers):
        target = self._target(client, auth_headers(owner))
        path = self._path(target["upload_url"])

        assert client.put(path, content=b"first").status_code == 200
        second = client.put(path, content=b"second")

        assert second.status_code == 409

    def test_tampered_token(self, client, owner, auth_headers):
        target = self._target(client, auth_headers(owner))

        response = client.put(self._path(target["upload_url"]) + "x", content=b"data")

        assert response.status_code == 400
        assert response.json()["error"] == "upload_rejected"

    def test_oversized_upload(self, client, owner, auth_headers):
        target = self._target(client, auth_headers(owner))

        with patch("scenevault.api.storage.settings") as mock_settings:
            mock_settings.MAX_UPLOAD_SIZE = 4
            response = client.put(self._path(target["upload_url"]), content=b"too large")

        assert response.status_code == 413
        assert "9 bytes" in response.json()["detail"]

    def test_oversized_chunked_upload(self, client, storage, owner, auth_headers):
        """A body without Content-Length is cut off once it passes the cap"""
        target = self._target(client, auth_headers(owner))

        with patch("scenevault.api.storage.settings") as mock_settings:
            mock_settings.MAX_UPLOAD_SIZE = 4
            response = client.put(
                self._path(target["upload_url"]),
                content=iter([b"abc", b"def", b"ghi"])
            )

        assert response.status_code == 413
        assert not storage.exists(target["storage_id"])

    def test_chunked_upload_within_cap(self, client, storage, owner, auth_headers):
        target = self._target(client, auth_headers(owner))

        response = client.put(self._path(target["upload_url"]), content=iter([b"glTF-", b"chunks"]))

        assert response.status_code == 200
        with open(storage.get_local_path(target["storage_id"]), "rb") as f:
            assert f.read() == b"glTF-chunks"

    def test_concurrent_use_of_token_keeps_first_upload(self, client, storage, owner, auth_headers):
        """An asset written after the existence check is not overwritten"""
        target = self._target(client, auth_headers(owner))
        storage.save(target["storage_id"], b"first")

        with patch.object(storage, "exists", return_value=False):
            response = client.put(self._path(target["upload_url"]), content=b"second")

        assert response.status_code == 409
        with open(storage.get_local_path(target["storage_id"]), "rb") as f:
            assert f.read() == b"first"

    def test_missing_file(self, client):
        assert client.get(f"/api/v1/storage/files/{'0' * 32}").status_code == 404
