"""
FastAPI app for the M3U registry.

Capa HTTP: asocia un MAC ID con una o más playlists (fichero subido o URL)
y sirve los ficheros subidos bajo /uploads.

Run:
    m3u-registry
or:
    uvicorn m3u_backend.api.main:create_app --factory --port 3000
"""

import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from m3u_backend.api.router import router
from m3u_backend.application.config import Settings, load_settings
from m3u_backend.domain.errors import RegistryError
from m3u_backend.infrastructure.network import get_local_ip
from m3u_backend.infrastructure.reference_store import ReferenceStore
from m3u_backend.infrastructure.tls import ensure_dev_certificate
from m3u_backend.infrastructure.upload_storage import UploadStorage

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own store and upload dir. One store per app."""
    settings = settings or load_settings()

    store = ReferenceStore(settings.data_file)
    store.load()
    uploads = UploadStorage(settings.uploads_dir)
    uploads.ensure_dir()

    app = FastAPI(
        title="M3U Registry API",
        description="MAC ID -> playlist links",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.uploads = uploads

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")
    return app


async def _serve(servers) -> None:
    await asyncio.gather(*(server.serve() for server in servers))


def main() -> None:
    import uvicorn

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    app = create_app(settings)
    local_ip = get_local_ip()

    servers = [uvicorn.Server(uvicorn.Config(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower()))]
    logger.info("Server running at http://%s:%d", local_ip, settings.port)

    if settings.https_enabled:
        if ensure_dev_certificate(settings.cert_file, settings.key_file, hosts=[local_ip]):
            servers.append(
                uvicorn.Server(
                    uvicorn.Config(
                        app,
                        host=settings.host,
                        port=settings.https_port,
                        ssl_certfile=str(settings.cert_file),
                        ssl_keyfile=str(settings.key_file),
                        log_level=settings.log_level.lower(),
                    )
                )
            )
            logger.info("HTTPS server running at https://%s:%d", local_ip, settings.https_port)

    asyncio.run(_serve(servers))


# Bloque para ejecutar con uvicorn
if __name__ == "__main__":
    main()
