"""Catalog endpoints: list, upload, edit, delete and download packages."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from autostore.core.security import get_current_account
from autostore.interfaces.http.deps import get_catalog_service
from autostore.modules.packages import (
    CatalogService,
    PackageAssetMissingError,
    PackageNotFoundError,
    PackageRecord,
    PackageStoreError,
    PackageUpdateInput,
    PackageUploadInput,
    PackageValidationError,
)
from autostore.schemas import (
    ErrorResponse,
    MessageResponse,
    PackageResponse,
    PackageUpdate,
    TokenData,
    UploadResponse,
)

router = APIRouter()

APK_MEDIA_TYPE = "application/vnd.android.package-archive"
NOT_FOUND = "App not found"


def _to_schema(record: PackageRecord) -> PackageResponse:
    return PackageResponse(
        id=record.id,
        name=record.name,
        version=record.version,
        developer=record.developer,
        category=record.category.value,
        description=record.description,
        size=record.size,
        upload_date=record.upload_date,
        status=record.status.value,
        icon_url=record.icon_url,
    )


@router.get("", response_model=list[PackageResponse], summary="List the full catalog, newest first")
async def list_packages(service: CatalogService = Depends(get_catalog_service)) -> list[PackageResponse]:
    return [_to_schema(record) for record in await service.list_packages()]


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Upload a package binary with its metadata",
)
async def upload_package(
    apk: UploadFile = File(...),
    version: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    developer: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    icon_url: Optional[str] = Form(None, alias="iconUrl"),
    account: TokenData = Depends(get_current_account),
    service: CatalogService = Depends(get_catalog_service),
) -> UploadResponse:
    metadata = PackageUploadInput(
        version=version,
        name=name,
        developer=developer,
        category=category,
        description=description,
        size=size,
        icon_url=icon_url,
    )
    try:
        record = await service.upload_package(
            stream=apk,
            filename=apk.filename,
            metadata=metadata,
            uploader=account.username,
        )
    except PackageValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except PackageStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    finally:
        await apk.close()

    return UploadResponse(id=record.id, message="App uploaded successfully")


@router.get(
    "/{package_id}",
    response_model=PackageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get one catalog entry",
)
async def get_package(
    package_id: str, service: CatalogService = Depends(get_catalog_service)
) -> PackageResponse:
    try:
        record = await service.get_package(package_id)
    except PackageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    except PackageStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return _to_schema(record)


@router.put(
    "/{package_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Replace the editable metadata of a package",
)
async def update_package(
    package_id: str,
    payload: PackageUpdate,
    _: TokenData = Depends(get_current_account),
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    try:
        await service.update_package(
            package_id,
            PackageUpdateInput(
                name=payload.name,
                version=payload.version,
                developer=payload.developer,
                category=payload.category,
                description=payload.description,
                size=payload.size,
                icon_url=payload.icon_url,
            ),
        )
    except PackageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    except PackageValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except PackageStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during update",
        ) from exc
    return MessageResponse(message="App updated successfully")


@router.delete(
    "/{package_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Remove a package from the catalog (the stored file is kept)",
)
async def delete_package(
    package_id: str,
    _: TokenData = Depends(get_current_account),
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    try:
        await service.delete_package(package_id)
    except PackageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    except PackageStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return MessageResponse(message="App deleted")


@router.get(
    "/{package_id}/download",
    name="download_package",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}, 410: {"model": ErrorResponse}},
    summary="Download the package binary",
)
async def download_package(package_id: str, service: CatalogService = Depends(get_catalog_service)):
    try:
        download = await service.resolve_download(package_id)
    except PackageNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
    except PackageAssetMissingError as exc:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="App file is no longer available") from exc
    except PackageStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    return FileResponse(path=download.path, media_type=APK_MEDIA_TYPE, filename=download.filename)
