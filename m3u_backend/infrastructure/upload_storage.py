"""
Uploaded playlist files on disk. Served back as-is under /uploads by the API layer.
"""

import logging
import re
import shutil
import time
import unicodedata
import uuid
from pathlib import Path

from m3u_backend.domain.errors import StorageIOError
from m3u_backend.domain.models import UploadedPlaylist

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "playlist.m3u"


def sanitize_filename(name: str, max_length: int = 100) -> str:
    """Make a client-supplied filename safe to store. Directory parts are dropped."""
    if not name:
        return DEFAULT_FILENAME
    # Windows clients may send "C:\\path\\file.m3u".
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    name = re.sub(r'[<>:"/\\|?*#%\x00-\x1f]', "_", name)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"_+", "_", name)
    name = name.strip("_.")
    if len(name) > max_length:
        name = name[-max_length:].lstrip("_.")
    return name or DEFAULT_FILENAME


class UploadStorage:
    def __init__(self, uploads_dir: Path):
        self.uploads_dir = Path(uploads_dir)

    def ensure_dir(self) -> None:
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.uploads_dir / filename

    def save(self, upload: UploadedPlaylist) -> str:
        """
        Store the payload as "<epoch-millis>-<sanitized name>" and return that filename.
        Never overwrites an existing upload.
        """
        base = sanitize_filename(upload.filename)
        filename = f"{int(time.time() * 1000)}-{base}"
        path = self.path_for(filename)
        created = False
        try:
            try:
                f = path.open("xb")
            except FileExistsError:
                # Mismo milisegundo y mismo nombre: sufijo aleatorio.
                filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{base}"
                path = self.path_for(filename)
                f = path.open("xb")
            created = True
            with f:
                shutil.copyfileobj(upload.content, f)
        except OSError as e:
            logger.error("Failed to store upload %s", path, exc_info=True)
            if created:
                path.unlink(missing_ok=True)
            raise StorageIOError() from e
        logger.info("Stored upload %s", path)
        return filename
