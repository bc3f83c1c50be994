"""Translation administration endpoints.

CRUD over stored values plus CSV/JSON export and upserting import.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from api.dependencies.rate_limits import IMPORT_RATE_LIMIT, get_limiter
from infrastructure.localization import (
    DuplicateTranslationError,
    InvalidImportError,
    TranslationNotFoundError,
    TranslationRecord,
)
from infrastructure.logging import get_module_logger
from infrastructure.services import LocalizationServiceDep

logger = get_module_logger()

router = APIRouter(prefix="/localization", tags=["Localization Admin"])
limiter = get_limiter()


class TranslationPayload(BaseModel):
    """Translation as submitted by clients; missing culture means the default culture."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    culture: Optional[str] = None
    tenant_id: Optional[str] = Field(default=None, alias="tenantId")
    value: Optional[str] = None

    def to_record(self) -> TranslationRecord:
        return TranslationRecord(
            key=self.key,
            culture=self.culture,
            tenant_id=self.tenant_id,
            value=self.value,
        )


class TranslationResponse(BaseModel):
    id: Optional[int] = None
    key: str
    culture: str
    tenantId: Optional[str] = None
    value: str

    @classmethod
    def from_record(cls, record: TranslationRecord) -> "TranslationResponse":
        return cls(id=record.id, **record.to_dict())


class ImportResult(BaseModel):
    upserted: int


class PreviewResult(BaseModel):
    count: int
    translations: List[TranslationResponse]


async def _read_text(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=422, detail="Payload must be UTF-8 text") from e


@router.get("/translations", response_model=List[TranslationResponse])
def list_translations(
    localization: LocalizationServiceDep,
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    culture: Optional[str] = None,
    search: Optional[str] = None,
):
    """List the rows of one tenant scope (global when tenantId is omitted)."""
    records = localization.admin.list(tenant_id, culture, search)
    return [TranslationResponse.from_record(r) for r in records]


@router.get("/translations/{value_id}", response_model=TranslationResponse)
def get_translation(value_id: int, localization: LocalizationServiceDep):
    record = localization.admin.get(value_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Translation {value_id} not found")
    return TranslationResponse.from_record(record)


@router.post(
    "/translations",
    response_model=TranslationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_translation(payload: TranslationPayload, localization: LocalizationServiceDep):
    try:
        value_id = localization.admin.create(payload.to_record())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except DuplicateTranslationError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return TranslationResponse.from_record(localization.admin.get(value_id))


@router.put("/translations/{value_id}", response_model=TranslationResponse)
def update_translation(
    value_id: int,
    payload: TranslationPayload,
    localization: LocalizationServiceDep,
):
    try:
        record = localization.admin.update(value_id, payload.to_record())
    except TranslationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except DuplicateTranslationError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return TranslationResponse.from_record(record)


@router.delete("/translations/{value_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_translation(value_id: int, localization: LocalizationServiceDep):
    """Delete one value row. Deleting a missing row is not an error."""
    localization.admin.delete(value_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/keys/{key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_key(key: str, localization: LocalizationServiceDep):
    """Delete a key together with all of its values."""
    if not localization.admin.delete_key(key):
        raise HTTPException(status_code=404, detail=f"Key {key!r} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/export.csv")
def export_csv(
    localization: LocalizationServiceDep,
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    culture: Optional[str] = None,
    search: Optional[str] = None,
):
    content = localization.admin.export_csv(tenant_id, culture, search)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="translations.csv"'},
    )


@router.get("/export.json")
def export_json(
    localization: LocalizationServiceDep,
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    culture: Optional[str] = None,
    search: Optional[str] = None,
):
    content = localization.admin.export_json(tenant_id, culture, search)
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="translations.json"'},
    )


@router.post("/import.csv", response_model=ImportResult)
@limiter.limit(IMPORT_RATE_LIMIT)
async def import_csv(request: Request, localization: LocalizationServiceDep):
    """Upsert translations from a CSV body (``Key,Culture,TenantId,Value``)."""
    text = await _read_text(request)
    try:
        upserted = await run_in_threadpool(localization.admin.import_csv, text)
    except InvalidImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return ImportResult(upserted=upserted)


@router.post("/import.json", response_model=ImportResult)
@limiter.limit(IMPORT_RATE_LIMIT)
async def import_json(request: Request, localization: LocalizationServiceDep):
    """Upsert translations from a JSON array body."""
    text = await _read_text(request)
    try:
        upserted = await run_in_threadpool(localization.admin.import_json, text)
    except InvalidImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return ImportResult(upserted=upserted)


@router.post("/preview.csv", response_model=PreviewResult)
async def preview_csv(request: Request, localization: LocalizationServiceDep):
    """Parse a CSV body and return the normalized rows without writing them."""
    text = await _read_text(request)
    try:
        records = localization.admin.preview_csv(text)
    except InvalidImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return PreviewResult(
        count=len(records),
        translations=[TranslationResponse.from_record(r) for r in records],
    )


@router.post("/preview.json", response_model=PreviewResult)
async def preview_json(request: Request, localization: LocalizationServiceDep):
    """Parse a JSON array body and return the normalized rows without writing them."""
    text = await _read_text(request)
    try:
        records = localization.admin.preview_json(text)
    except InvalidImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return PreviewResult(
        count=len(records),
        translations=[TranslationResponse.from_record(r) for r in records],
    )
