"""
Configuración del servicio. Un solo lugar para rutas, puertos y flags; todo
sobreescribible por variables de entorno.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PORT = 3000
DEFAULT_HTTPS_PORT = 3443
DEFAULT_UPLOADS_DIR = "uploads"
DEFAULT_DATA_FILE = "data.json"
DEFAULT_CERT_FILE = "certs/cert.pem"
DEFAULT_KEY_FILE = "certs/key.pem"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    https_port: int = DEFAULT_HTTPS_PORT
    https_enabled: bool = False
    uploads_dir: Path = Path(DEFAULT_UPLOADS_DIR)
    data_file: Path = Path(DEFAULT_DATA_FILE)
    cert_file: Path = Path(DEFAULT_CERT_FILE)
    key_file: Path = Path(DEFAULT_KEY_FILE)
    # Si se define, los links de ficheros subidos usan esta base (ej. "https://iptv.lan:3443").
    public_base_url: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    origins = [o.strip() for o in os.environ.get("M3U_CORS_ORIGINS", "*").split(",") if o.strip()]
    return Settings(
        host=os.environ.get("M3U_HOST", "0.0.0.0"),
        port=int(os.environ.get("M3U_PORT", DEFAULT_PORT)),
        https_port=int(os.environ.get("M3U_HTTPS_PORT", DEFAULT_HTTPS_PORT)),
        https_enabled=_env_flag("M3U_HTTPS_ENABLED"),
        uploads_dir=Path(os.environ.get("M3U_UPLOADS_DIR", DEFAULT_UPLOADS_DIR)),
        data_file=Path(os.environ.get("M3U_DATA_FILE", DEFAULT_DATA_FILE)),
        cert_file=Path(os.environ.get("M3U_CERT_FILE", DEFAULT_CERT_FILE)),
        key_file=Path(os.environ.get("M3U_KEY_FILE", DEFAULT_KEY_FILE)),
        public_base_url=os.environ.get("M3U_PUBLIC_BASE_URL") or None,
        cors_origins=origins or ["*"],
        log_level=os.environ.get("M3U_LOG_LEVEL", "INFO").upper(),
    )
