"""Audio listing and streaming (public endpoints)."""

from tests.conftest import FakeStorage


async def test_list_default_bucket(client, storage: FakeStorage) -> None:
    storage.buckets["shiurbank-audio"] = {"a.mp3": b"1", "b.ogg": b"2"}
    response = await client.get("/api/audio/list")
    assert response.status_code == 200
    assert response.json() == {"success": True, "files": ["a.mp3", "b.ogg"]}


async def test_stream_default_bucket(client, storage: FakeStorage) -> None:
    storage.buckets["shiurbank-audio"] = {"my shiur.mp3": b"audio-bytes"}
    response = await client.get("/api/audio/stream/my%20shiur.mp3")
    assert response.status_code == 200
    assert response.content == b"audio-bytes"
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.headers["cache-control"] == "public, max-age=3600"
    assert response.headers["content-length"] == "11"
    assert response.headers["content-disposition"] == (
        "inline; filename*=UTF-8''my%20shiur.mp3"
    )


async def test_stream_series_recording(client, storage: FakeStorage) -> None:
    storage.buckets["shiurbank-series-4"] = {"recordings/9.ogg": b"ogg"}
    response = await client.get("/api/audio/series/4/stream/9.ogg")
    assert response.status_code == 200
    assert response.content == b"ogg"
    assert response.headers["content-type"].startswith("audio/ogg")


async def test_missing_audio_is_404(client) -> None:
    response = await client.get("/api/audio/series/4/stream/nope.mp3")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Audio file not found"}
