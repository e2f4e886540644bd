"""HTTP and WebSocket tests against the full application"""

import os
import re
import shutil

import segno

from lanshare.services.notification_hub import NotificationHub


def upload(client, name: str, data: bytes):
    return client.post("/upload", files={"file": (name, data, "application/octet-stream")})


class TestListFiles:

    def test_empty(self, client):
        response = client.get("/files")
        assert response.status_code == 200
        assert response.json() == []

    def test_lists_uploaded_files(self, client):
        upload(client, "a.txt", b"aaa")
        upload(client, "b.txt", b"bbbbb")

        files = client.get("/files").json()
        assert sorted(f["name"].split("-", 2)[2] for f in files) == ["a.txt", "b.txt"]
        assert sum(f["size"] for f in files) == 8
        assert all(set(f) == {"name", "size", "mtime"} for f in files)

    def test_unreadable_directory(self, client, settings):
        """Test that a vanished storage root yields a 500 with an error body"""
        shutil.rmtree(settings.FILE_STORAGE_PATH)
        response = client.get("/files")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to list files"}


class TestUpload:

    def test_success(self, client):
        response = upload(client, "hello.txt", b"hello world")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "File uploaded successfully"
        assert re.fullmatch(r"\d+-\d+-hello\.txt", body["file"]["name"])
        assert body["file"]["size"] == 11

    def test_missing_file_field(self, client):
        response = client.post("/upload", data={"other": "value"})
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_empty_request(self, client):
        response = client.post("/upload")
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_write_failure(self, client, settings, monkeypatch):
        """Test that a failed write is a 500, nothing is listed and nothing is broadcast"""
        broadcasts = []
        monkeypatch.setattr(NotificationHub, "broadcast", lambda self, record: broadcasts.append(record))
        os.rmdir(os.path.join(settings.FILE_STORAGE_PATH, ".incoming"))

        response = upload(client, "doomed.bin", b"x" * 1000)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save file"}
        assert broadcasts == []
        assert client.get("/files").json() == []


class TestDownload:

    def test_round_trip(self, client):
        data = os.urandom(20_000)
        name = upload(client, "blob.bin", data).json()["file"]["name"]

        response = client.get(f"/download/{name}")
        assert response.status_code == 200
        assert response.content == data
        assert response.headers["content-disposition"].startswith("attachment")
        assert name in response.headers["content-disposition"]

    def test_never_uploaded(self, client):
        response = client.get("/download/does-not-exist.txt")
        assert response.status_code == 404
        assert response.json() == {"error": "File not found"}

    def test_backslash_traversal(self, client, tmp_path):
        (tmp_path / "secret.txt").write_text("secret")
        response = client.get("/download/..%5Csecret.txt")
        assert response.status_code == 404
        assert response.json() == {"error": "File not found"}

    def test_encoded_slash_traversal(self, client, tmp_path):
        """Test that an encoded ../ never reaches a file outside the root"""
        (tmp_path / "secret.txt").write_text("secret")
        response = client.get("/download/..%2Fsecret.txt")
        assert response.status_code == 404
        assert "error" in response.json()


class TestServerInfo:

    def test_url_and_qr_code(self, client):
        response = client.get("/server-info")
        assert response.status_code == 200
        body = response.json()
        assert body["url"] == "http://192.168.1.20:3000"
        assert body["qrCodeUrl"].startswith("data:image/png;base64,")

    def test_encoding_failure(self, client, monkeypatch):
        def broken_make(*args, **kwargs):
            raise ValueError("boom")

        monkeypatch.setattr(segno, "make_qr", broken_make)
        response = client.get("/server-info")
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate QR code"}


class TestLiveUpdates:

    def test_connect_and_disconnect_without_uploads(self, client):
        """Test that a viewer can open and close the channel cleanly with nothing sent"""
        with client.websocket_connect("/ws"):
            assert len(client.app.state.hub) == 1
        assert len(client.app.state.hub) == 0

    def test_reconnect_after_disconnect(self, client):
        """Test that a second session works after the first one has closed"""
        with client.websocket_connect("/ws"):
            pass
        with client.websocket_connect("/ws") as ws:
            upload(client, "again.txt", b"again")
            assert ws.receive_json()["data"]["name"].endswith("-again.txt")

    def test_connected_client_receives_upload(self, client):
        """Test that a viewer connected before the upload is told about it"""
        with client.websocket_connect("/ws") as ws:
            assert len(client.app.state.hub) == 1
            name = upload(client, "notes.md", b"# notes").json()["file"]["name"]

            event = ws.receive_json()
            assert event["event"] == "file_uploaded"
            assert event["data"]["name"] == name
            assert event["data"]["size"] == 7

    def test_every_viewer_receives_each_upload(self, client):
        with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
            upload(client, "one.txt", b"1")
            upload(client, "two.txt", b"22")

            for ws in (first, second):
                names = [ws.receive_json()["data"]["name"] for _ in range(2)]
                assert sorted(n.split("-", 2)[2] for n in names) == ["one.txt", "two.txt"]

    def test_late_viewer_only_sees_later_uploads(self, client):
        upload(client, "before.txt", b"b")
        with client.websocket_connect("/ws") as ws:
            upload(client, "after.txt", b"a")
            event = ws.receive_json()
            assert event["data"]["name"].endswith("-after.txt")


def test_cat_png_scenario(client):
    """Viewer B is connected, cat.png (10,000 bytes) is uploaded, then listed and downloaded"""
    data = os.urandom(10_000)

    with client.websocket_connect("/ws") as viewer_b:
        response = upload(client, "cat.png", data)
        assert response.status_code == 200

        event = viewer_b.receive_json()
        assert event["event"] == "file_uploaded"
        assert re.fullmatch(r".+-cat\.png", event["data"]["name"])
        assert event["data"]["size"] == 10_000
        name = event["data"]["name"]

    listed = {f["name"]: f for f in client.get("/files").json()}
    assert listed[name]["size"] == 10_000

    download = client.get(f"/download/{name}")
    assert download.status_code == 200
    assert download.content == data


def test_front_end_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "LAN Share" in response.text
