"""
Register playlist use case. Orchestrates store + upload storage. No FastAPI.

Flujo: validar MAC ID -> resolver link (fichero subido o URL) -> append + persistir.
"""

import logging
from urllib.parse import quote

from m3u_backend.domain.errors import MissingIdentifier, MissingReference
from m3u_backend.domain.models import Registration, UploadedPlaylist
from m3u_backend.infrastructure.reference_store import ReferenceStore
from m3u_backend.infrastructure.upload_storage import UploadStorage

logger = logging.getLogger(__name__)


def build_upload_link(base_url: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/uploads/{quote(filename)}"


def register_reference(
    store: ReferenceStore,
    uploads: UploadStorage,
    mac_id: str | None,
    m3u_url: str | None,
    m3u_file: UploadedPlaylist | None,
    base_url: str,
) -> Registration:
    """
    Append a playlist link for mac_id and return every link registered for it.

    If a file is given it is stored and linked through /uploads; otherwise m3u_url
    is used verbatim. The file wins when both are sent.

    Raises:
        MissingIdentifier: mac_id absent or blank. Nothing is written.
        MissingReference: neither file nor URL. Nothing is written.
        StorageIOError: the file or the store could not be written.
    """
    if mac_id is None or not mac_id.strip():
        raise MissingIdentifier()
    has_url = m3u_url is not None and m3u_url.strip() != ""
    if m3u_file is None and not has_url:
        raise MissingReference()

    if m3u_file is not None:
        # Sin rollback: si falla el append, el fichero queda huérfano en uploads.
        filename = uploads.save(m3u_file)
        link = build_upload_link(base_url, filename)
        kind = "file"
    else:
        link = m3u_url
        kind = "url"

    links = store.append(mac_id, link)
    logger.info("Registered %s link for %s (%d total)", kind, mac_id, len(links))
    return Registration(mac_id=mac_id, links=links)
