"""Tests for the file and drive API endpoints."""


def _upload(client, headers, name="report.pdf", content=b"%PDF-1.7", folder=None):
    data = {"folder": folder} if folder is not None else {}
    resp = client.post(
        "/api/files",
        files={"file": (name, content, "application/pdf")},
        data=data,
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["file"]


def _folder(client, headers, name, parent=None):
    return client.post("/api/folders", json={"name": name, "parent": parent}, headers=headers).json()["folder"]


class TestUpload:

    def test_upload_into_folder_and_list(self, client, auth_headers, store):
        docs = _folder(client, auth_headers, "Docs")
        record = _upload(client, auth_headers, folder=docs["id"])
        assert record["folder"] == docs["id"]
        assert record["name"] == "report.pdf"
        assert record["size"] == 8
        assert record["mime_type"] == "application/pdf"
        assert len(store.blobs) == 1

        resp = client.get(f"/api/files?folder={docs['id']}", headers=auth_headers)
        assert [f["id"] for f in resp.json()["files"]] == [record["id"]]
        assert client.get("/api/files?folder=null", headers=auth_headers).json()["files"] == []

    def test_upload_to_root(self, client, auth_headers):
        record = _upload(client, auth_headers, folder="null")
        assert record["folder"] is None

    def test_missing_file_is_400(self, client, auth_headers):
        resp = client.post("/api/files", data={"folder": "null"}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"

    def test_foreign_folder_is_400(self, client, auth_headers, other_headers, store):
        theirs = _folder(client, other_headers, "Theirs")
        resp = client.post(
            "/api/files",
            files={"file": ("a.txt", b"x", "text/plain")},
            data={"folder": theirs["id"]},
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "INVALID_PARENT"
        assert store.blobs == {}


class TestDownload:

    def test_redirects_to_signed_url(self, client, auth_headers):
        record = _upload(client, auth_headers)
        resp = client.get(f"/api/files/download/{record['id']}", headers=auth_headers, follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"].startswith("https://cdn.test/image/upload/s--sig--/")

    def test_other_owner_is_404(self, client, auth_headers, other_headers):
        record = _upload(client, auth_headers)
        resp = client.get(f"/api/files/download/{record['id']}", headers=other_headers, follow_redirects=False)
        assert resp.status_code == 404
        assert resp.json()["error"] == "FILE_NOT_FOUND"


class TestDelete:

    def test_delete(self, client, auth_headers, store):
        record = _upload(client, auth_headers)
        resp = client.delete(f"/api/files/{record['id']}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        assert store.blobs == {}
        assert client.get("/api/files", headers=auth_headers).json()["files"] == []

    def test_delete_succeeds_when_remote_remove_fails(self, client, auth_headers, store):
        record = _upload(client, auth_headers)
        store.fail_remove = True
        assert client.delete(f"/api/files/{record['id']}", headers=auth_headers).status_code == 200
        assert client.get("/api/files", headers=auth_headers).json()["files"] == []

    def test_other_owner_is_404(self, client, auth_headers, other_headers):
        record = _upload(client, auth_headers)
        assert client.delete(f"/api/files/{record['id']}", headers=other_headers).status_code == 404
        assert len(client.get("/api/files", headers=auth_headers).json()["files"]) == 1


class TestDriveView:

    def test_root_view(self, client, auth_headers):
        docs = _folder(client, auth_headers, "Docs")
        _upload(client, auth_headers, folder=docs["id"])

        body = client.get("/api/drive", headers=auth_headers).json()
        assert body["breadcrumb"] == [{"id": None, "name": "My Drive"}]
        assert [f["name"] for f in body["folders"]] == ["Docs"]
        assert body["files"] == []

    def test_folder_view_with_query(self, client, auth_headers):
        docs = _folder(client, auth_headers, "Docs")
        _upload(client, auth_headers, name="report.pdf", folder=docs["id"])
        _upload(client, auth_headers, name="notes.txt", folder=docs["id"])

        body = client.get(f"/api/drive?folder={docs['id']}&q=RePo", headers=auth_headers).json()
        assert body["folder"] == docs["id"]
        assert [seg["name"] for seg in body["breadcrumb"]] == ["My Drive", "Docs"]
        assert [f["name"] for f in body["files"]] == ["report.pdf"]

    def test_unknown_folder_is_404(self, client, auth_headers):
        assert client.get("/api/drive?folder=missing", headers=auth_headers).status_code == 404
