import os

import pytest

from bandsite.core.errors import UploadRejected
from bandsite.services.storage import LocalStorage


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path))


def test_validate_accepts_png(storage):
    assert storage.validate(PNG, folder="products", content_type="image/png", max_bytes=1024) == ".png"


@pytest.mark.parametrize(
    "data, folder, content_type, max_bytes, status",
    [
        (PNG, "secret", "image/png", 1024, 400),
        (PNG, "products", "application/pdf", 1024, 415),
        (PNG, "products", "image/png", 4, 413),
        (b"", "products", "image/png", 1024, 400),
        (b"GIF89a....", "products", "image/png", 1024, 415),
    ],
)
def test_validate_rejects(storage, data, folder, content_type, max_bytes, status):
    with pytest.raises(UploadRejected) as exc:
        storage.validate(data, folder=folder, content_type=content_type, max_bytes=max_bytes)
    assert exc.value.status_code == status


def test_save_bytes_returns_public_url(storage):
    url = storage.save_bytes(PNG, folder="flyers", ext=".png")
    assert url.startswith("/uploads/flyers/")
    name = url.rsplit("/", 1)[1]
    stamp, rest = name.split("-", 1)
    assert stamp.isdigit()
    assert len(rest) == len("0123456789abcdef.png")
    with open(os.path.join(storage.base_dir, "flyers", name), "rb") as f:
        assert f.read() == PNG
