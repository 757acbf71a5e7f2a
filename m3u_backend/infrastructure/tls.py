"""
Development TLS certificate for the optional HTTPS listener.
"""

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

CERT_DAYS = 825


def ensure_dev_certificate(cert_file: Path, key_file: Path, hosts: list[str] | None = None) -> bool:
    """
    Make sure a cert/key pair exists. If not, create a self-signed one with the
    openssl CLI. Returns False when no usable pair is available.
    """
    cert_file, key_file = Path(cert_file), Path(key_file)
    if cert_file.exists() and key_file.exists():
        return True

    openssl = shutil.which("openssl")
    if openssl is None:
        logger.warning("openssl not found; cannot create a development certificate, HTTPS disabled")
        return False

    hosts = hosts or ["localhost"]
    san = ",".join(
        f"IP:{h}" if h.replace(".", "").isdigit() else f"DNS:{h}"
        for h in dict.fromkeys(["localhost", "127.0.0.1", *hosts])
    )
    cert_file.parent.mkdir(parents=True, exist_ok=True)
    key_file.parent.mkdir(parents=True, exist_ok=True)
    cmd = [
        openssl, "req", "-x509", "-newkey", "rsa:2048", "-nodes",
        "-keyout", str(key_file),
        "-out", str(cert_file),
        "-days", str(CERT_DAYS),
        "-subj", "/CN=localhost",
        "-addext", f"subjectAltName={san}",
    ]
    try:
        subprocess.run(cmd, check=True, capture_output=True, timeout=60)
    except (OSError, subprocess.SubprocessError):
        logger.warning("Could not create development certificate, HTTPS disabled", exc_info=True)
        return False
    logger.info("Created development certificate %s (%s)", cert_file, san)
    return True
