import io

import pytest

from m3u_backend.application.use_cases.lookup import get_links, list_mac_ids
from m3u_backend.application.use_cases.register_reference import build_upload_link, register_reference
from m3u_backend.domain.errors import MissingIdentifier, MissingReference, NotFound
from m3u_backend.domain.models import UploadedPlaylist
from m3u_backend.infrastructure.upload_storage import UploadStorage

BASE = "http://192.168.1.10:3000"


@pytest.fixture
def uploads(tmp_path):
    storage = UploadStorage(tmp_path / "uploads")
    storage.ensure_dir()
    return storage


@pytest.mark.parametrize("mac_id", [None, "", "   "])
def test_missing_mac_id_writes_nothing(store, uploads, mac_id):
    playlist = UploadedPlaylist(filename="a.m3u", content=io.BytesIO(b"#EXTM3U"))
    with pytest.raises(MissingIdentifier):
        register_reference(store, uploads, mac_id, "http://example.com/x.m3u", playlist, BASE)

    assert list_mac_ids(store) == []
    assert list(uploads.uploads_dir.iterdir()) == []


@pytest.mark.parametrize("url", [None, "", "  "])
def test_missing_reference(store, uploads, url):
    with pytest.raises(MissingReference):
        register_reference(store, uploads, "AA:BB", url, None, BASE)
    assert "AA:BB" not in store


def test_url_is_stored_verbatim(store, uploads):
    reg = register_reference(store, uploads, "AA:BB", "http://example.com/x.m3u?token=1", None, BASE)
    assert reg.mac_id == "AA:BB"
    assert reg.links == ["http://example.com/x.m3u?token=1"]


def test_file_wins_over_url(store, uploads):
    playlist = UploadedPlaylist(filename="my list.m3u", content=io.BytesIO(b"#EXTM3U"))
    reg = register_reference(store, uploads, "AA:BB", "http://example.com/x.m3u", playlist, BASE)

    [link] = reg.links
    assert link.startswith(f"{BASE}/uploads/")
    assert link.endswith("-my_list.m3u")
    stored = link.rsplit("/", 1)[-1]
    assert uploads.path_for(stored).read_bytes() == b"#EXTM3U"


def test_append_then_read_back(store, uploads):
    register_reference(store, uploads, "AA:BB", "http://example.com/1.m3u", None, BASE)
    before = len(get_links(store, "AA:BB").links)

    register_reference(store, uploads, "AA:BB", "http://example.com/2.m3u", None, BASE)
    links = get_links(store, "AA:BB").links

    assert len(links) == before + 1
    assert links[-1] == "http://example.com/2.m3u"


def test_get_links_unknown(store):
    with pytest.raises(NotFound):
        get_links(store, "unknown-id")


def test_build_upload_link_quotes_filename():
    assert build_upload_link("http://h:1/", "1-a b.m3u") == "http://h:1/uploads/1-a%20b.m3u"
