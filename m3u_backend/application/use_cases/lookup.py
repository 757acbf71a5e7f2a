"""
Read-only queries over the reference store. No FastAPI.
"""

from m3u_backend.domain.models import Registration
from m3u_backend.infrastructure.reference_store import ReferenceStore


def get_links(store: ReferenceStore, mac_id: str) -> Registration:
    """Raises NotFound if mac_id was never registered."""
    return Registration(mac_id=mac_id, links=store.get(mac_id))


def list_mac_ids(store: ReferenceStore) -> list[str]:
    return store.list_identifiers()
