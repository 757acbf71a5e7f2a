"""
Domain models. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass, field
from typing import BinaryIO


@dataclass(frozen=True)
class UploadedPlaylist:
    # Nombre original enviado por el cliente (sin sanear).
    filename: str
    content: BinaryIO


@dataclass(frozen=True)
class Registration:
    mac_id: str
    links: list[str] = field(default_factory=list)
