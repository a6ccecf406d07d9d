"""Routes for exporting, importing and clearing stored data."""
from fastapi import APIRouter, Depends, Response

from reading_tracker.models.schemas import ExportBundle, ImportRequest, ImportResult
from reading_tracker.services.data_transfer import DataTransferService, get_data_transfer_service

router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("/export", response_model=ExportBundle)
def export_data(service: DataTransferService = Depends(get_data_transfer_service)):
    return service.export_bundle()


@router.post("/import", response_model=ImportResult)
def import_data(
    payload: ImportRequest,
    service: DataTransferService = Depends(get_data_transfer_service),
):
    return service.import_bundle(payload)


@router.delete("", status_code=204)
def clear_data(service: DataTransferService = Depends(get_data_transfer_service)):
    service.clear_all()
    return Response(status_code=204)
