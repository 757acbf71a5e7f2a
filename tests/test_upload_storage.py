import io

import pytest

from m3u_backend.domain.errors import StorageIOError
from m3u_backend.domain.models import UploadedPlaylist
from m3u_backend.infrastructure import upload_storage
from m3u_backend.infrastructure.upload_storage import UploadStorage, sanitize_filename


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("list.m3u", "list.m3u"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\my list.m3u", "my_list.m3u"),
        ("canal#1?.m3u", "canal_1_.m3u"),
        ("", "playlist.m3u"),
        ("...", "playlist.m3u"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_save_writes_timestamped_file(tmp_path, monkeypatch):
    monkeypatch.setattr(upload_storage.time, "time", lambda: 1700000000.123)
    storage = UploadStorage(tmp_path / "uploads")
    storage.ensure_dir()

    name = storage.save(UploadedPlaylist(filename="list.m3u", content=io.BytesIO(b"#EXTM3U\n")))

    assert name == "1700000000123-list.m3u"
    assert storage.path_for(name).read_bytes() == b"#EXTM3U\n"


def test_same_name_same_millisecond_does_not_overwrite(tmp_path, monkeypatch):
    monkeypatch.setattr(upload_storage.time, "time", lambda: 1700000000.0)
    storage = UploadStorage(tmp_path)

    first = storage.save(UploadedPlaylist(filename="a.m3u", content=io.BytesIO(b"one")))
    second = storage.save(UploadedPlaylist(filename="a.m3u", content=io.BytesIO(b"two")))

    assert first != second
    assert second.endswith("-a.m3u")
    assert storage.path_for(first).read_bytes() == b"one"
    assert storage.path_for(second).read_bytes() == b"two"


def test_missing_directory_raises_storage_error(tmp_path):
    storage = UploadStorage(tmp_path / "does-not-exist")
    with pytest.raises(StorageIOError):
        storage.save(UploadedPlaylist(filename="a.m3u", content=io.BytesIO(b"x")))
