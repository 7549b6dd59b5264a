"""
Dataset endpoints: upload, load by id, upload history, summary and report
download. Parsing, statistics and PDFs are produced by the backend.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from api.dependencies import get_backend_client, get_session_data, require_data
from api.session_store import SessionData
from api.models.responses import (
    DatasetLoadResponse,
    HistoryEntryResponse,
    SummaryResponse,
    UploadResponse,
)
from config.settings import Config
from core.exceptions import LoadFailure, ReportFailure, UploadFailure
from core.export import report_filename
from services.backend_client import BackendClient

router = APIRouter(prefix="/api/dataset", tags=["dataset"])


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: Optional[UploadFile] = File(None),
    session: SessionData = Depends(get_session_data),
    client: BackendClient = Depends(get_backend_client),
):
    """Upload a CSV file and load the dataset the backend creates from it."""
    filename = file.filename if file is not None else None
    content = file.file.read() if file is not None else None

    try:
        result = client.upload_file(filename, content)
    except UploadFailure as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    controller = session.controller
    token = controller.begin_load()
    try:
        dataset = client.load_dataset(result.dataset_id)
    except LoadFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return UploadResponse(
        message=f"File uploaded successfully! {result.record_count} records added.",
        dataset_id=result.dataset_id,
        record_count=result.record_count,
        applied=controller.apply_dataset(token, dataset),
    )


@router.post("/{dataset_id}/load", response_model=DatasetLoadResponse)
def load_dataset(
    dataset_id: str,
    session: SessionData = Depends(get_session_data),
    client: BackendClient = Depends(get_backend_client),
):
    """Open a previously uploaded dataset."""
    controller = session.controller
    token = controller.begin_load()
    try:
        dataset = client.load_dataset(dataset_id)
    except LoadFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return DatasetLoadResponse(
        dataset_id=dataset.dataset_id if dataset.dataset_id is not None else dataset_id,
        filename=dataset.filename,
        record_count=len(dataset.records),
        applied=controller.apply_dataset(token, dataset),
    )


@router.get("/history", response_model=List[HistoryEntryResponse])
def upload_history(client: BackendClient = Depends(get_backend_client)):
    """Most recent uploads."""
    try:
        datasets = client.list_datasets(limit=Config.load().app.history_limit)
    except LoadFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return [
        HistoryEntryResponse(
            id=entry["id"],
            filename=entry.get("filename"),
            uploaded_at=entry.get("uploaded_at"),
            record_count=entry.get("record_count"),
        )
        for entry in datasets
    ]


@router.get("/summary", response_model=SummaryResponse)
def get_summary(session: SessionData = Depends(require_data)):
    summary = session.controller.summary
    if summary is None:
        raise HTTPException(status_code=400, detail="No summary available")
    return SummaryResponse(**summary.to_dict())


@router.get("/report")
def download_report(
    session: SessionData = Depends(require_data),
    client: BackendClient = Depends(get_backend_client),
):
    """Proxy the backend's PDF report for the loaded dataset."""
    dataset_id = session.controller.dataset_id
    try:
        content = client.download_report(dataset_id)
    except ReportFailure as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(dataset_id)}"'},
    )
