"""
API router. Calls application only. No business logic.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import ValidationError

from m3u_backend.api.schemas import (
    ErrorResponse,
    JsonUploadRequest,
    LinksResponse,
    MacAddressResponse,
    MacIdsResponse,
    UploadResponse,
)
from m3u_backend.application.config import Settings
from m3u_backend.application.use_cases.lookup import get_links, list_mac_ids
from m3u_backend.application.use_cases.register_reference import register_reference
from m3u_backend.domain.errors import InternalError, InvalidRequest, MacLookupError, RegistryError
from m3u_backend.domain.models import UploadedPlaylist
from m3u_backend.infrastructure.network import get_host_mac_address, get_local_ip
from m3u_backend.infrastructure.reference_store import ReferenceStore
from m3u_backend.infrastructure.upload_storage import UploadStorage

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_SUCCESS_MESSAGE = "M3U File/URL stored successfully!"


def get_store(request: Request) -> ReferenceStore:
    return request.app.state.store


def get_uploads(request: Request) -> UploadStorage:
    return request.app.state.uploads


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_json_upload(request: Request) -> JsonUploadRequest | None:
    """Body of a JSON /upload request; None for form and multipart requests."""
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if content_type != "application/json":
        return None
    try:
        return JsonUploadRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        raise InvalidRequest() from e


def resolve_base_url(request: Request, settings: Settings) -> str:
    """Base for links to uploaded files: configured public URL, else local IP + listener port."""
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    scheme = request.url.scheme
    port = request.url.port or (settings.https_port if scheme == "https" else settings.port)
    return f"{scheme}://{get_local_ip()}:{port}"


@router.get("/")
def root():
    """Endpoint raíz"""
    return {"message": "M3U registry", "status": "ok"}


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def post_upload(
    request: Request,
    mac_id: str | None = Form(None, alias="macId"),
    m3u_url: str | None = Form(None, alias="m3uUrl"),
    m3u_file: UploadFile | None = File(None, alias="m3uFile"),
    json_body: JsonUploadRequest | None = Depends(get_json_upload),
    store: ReferenceStore = Depends(get_store),
    uploads: UploadStorage = Depends(get_uploads),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    """
    POST /upload

    Form:
        - macId (str): MAC ID del dispositivo (obligatorio)
        - m3uUrl (str): URL de la playlist (opcional)
        - m3uFile (file): fichero M3U (opcional, tiene prioridad sobre m3uUrl)

    JSON (application/json):
        - {"macId": str, "m3uUrl": str}, mismas reglas; sin fichero.

    Returns:
        JSON con todos los links registrados para ese MAC ID, en orden de subida.
    """
    if json_body is not None:
        mac_id, m3u_url = json_body.mac_id, json_body.m3u_url

    playlist = None
    # Un input file vacío de un formulario HTML llega sin nombre.
    if m3u_file is not None and m3u_file.filename:
        playlist = UploadedPlaylist(filename=m3u_file.filename, content=m3u_file.file)

    try:
        registration = register_reference(
            store=store,
            uploads=uploads,
            mac_id=mac_id,
            m3u_url=m3u_url,
            m3u_file=playlist,
            base_url=resolve_base_url(request, settings),
        )
    except RegistryError:
        raise
    except Exception as e:
        logger.exception("Unexpected error registering playlist for %r", mac_id)
        raise InternalError() from e
    return UploadResponse(message=UPLOAD_SUCCESS_MESSAGE, links=registration.links)


@router.get("/get-m3u/{mac_id}", response_model=LinksResponse, responses={404: {"model": ErrorResponse}})
def get_m3u(mac_id: str, store: ReferenceStore = Depends(get_store)) -> LinksResponse:
    """
    GET /get-m3u/{macId}

    Returns:
        {"macId": str, "links": [str]} o 404 si el MAC ID no está registrado.
    """
    registration = get_links(store, mac_id)
    return LinksResponse(mac_id=registration.mac_id, links=registration.links)


@router.get("/get-mac-ids", response_model=MacIdsResponse)
def get_mac_ids(store: ReferenceStore = Depends(get_store)) -> MacIdsResponse:
    return MacIdsResponse(mac_ids=list_mac_ids(store))


@router.get("/get-mac-address", response_model=MacAddressResponse, responses={500: {"model": ErrorResponse}})
def get_mac_address() -> MacAddressResponse:
    """MAC del propio servidor (primera interfaz válida), no la del cliente."""
    try:
        return MacAddressResponse(mac_address=get_host_mac_address())
    except Exception as e:
        logger.exception("Failed to read host MAC address")
        raise MacLookupError() from e
