"""
API request/response schemas. Pydantic only in api layer.
Los clientes existentes esperan camelCase (macId, macIds, macAddress).
"""

from pydantic import BaseModel, ConfigDict, Field


class JsonUploadRequest(BaseModel):
    """Cuerpo JSON de POST /upload (clientes que no usan formularios)."""

    model_config = ConfigDict(populate_by_name=True)

    mac_id: str | None = Field(None, alias="macId")
    m3u_url: str | None = Field(None, alias="m3uUrl")


class UploadResponse(BaseModel):
    message: str
    links: list[str]


class LinksResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mac_id: str = Field(alias="macId")
    links: list[str]


class MacIdsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mac_ids: list[str] = Field(alias="macIds")


class MacAddressResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mac_address: str = Field(alias="macAddress")


class ErrorResponse(BaseModel):
    error: str
