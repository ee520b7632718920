"""Upload Route — verifies gated uploads and returned blob references."""

from tests.services.fakes import ADMIN_HEADERS, ADMIN_SECRET


async def test_upload_requires_admin(client, upload_dir):
    res = await client.post(
        "/api/upload", files={"file": ("a.txt", b"hello", "text/plain")},
    )
    assert res.status_code == 401
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


async def test_upload_returns_reference_and_writes_bytes(client, upload_dir):
    res = await client.post(
        "/api/upload",
        files={"file": ("my photo.png", b"\x89PNG", "image/png")},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 200
    url = res.json()["url"]
    assert url.startswith("/uploads/")
    assert url.endswith("-my-photo.png")
    stored = upload_dir / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG"


async def test_upload_accepts_form_field_token(client):
    res = await client.post(
        "/api/upload",
        files={"file": ("a.txt", b"x", "text/plain")},
        data={"admin_pass": ADMIN_SECRET},
    )
    assert res.status_code == 200


async def test_same_name_uploads_get_distinct_references(client):
    urls = set()
    for _ in range(3):
        res = await client.post(
            "/api/upload",
            files={"file": ("same.txt", b"x", "text/plain")},
            headers=ADMIN_HEADERS,
        )
        urls.add(res.json()["url"])
    assert len(urls) == 3


async def test_oversized_upload_is_413(client):
    res = await client.post(
        "/api/upload",
        files={"file": ("big.bin", b"x" * 2048, "application/octet-stream")},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 413
    assert res.json()["error"]["code"] == "PAYLOAD_TOO_LARGE"


async def test_upload_without_file_is_400(client):
    res = await client.post(
        "/api/upload", data={"other": "x"}, headers=ADMIN_HEADERS,
    )
    assert res.status_code == 400


async def test_oversized_upload_is_rejected_from_its_declared_size(client, upload_dir):
    res = await client.post(
        "/api/upload",
        files={"file": ("big.bin", b"x" * 4096, "application/octet-stream")},
        headers=ADMIN_HEADERS,
    )
    assert res.status_code == 413
    # The full size is reported, so the limit was checked before a bounded read
    assert "4096 bytes" in res.json()["error"]["message"]
    assert not upload_dir.exists() or not any(upload_dir.iterdir())
