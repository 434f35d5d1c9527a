from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, File, Request, UploadFile

from contract_analyzer.api.container import AppContainer
from contract_analyzer.api.uploads import read_pdf_upload
from contract_analyzer.database.models import STATUS_PENDING
from contract_analyzer.extraction.models import Submittal
from contract_analyzer.logging.logger import Log

router = APIRouter()

ASYNC_ACCEPTED_MESSAGE = "Document uploaded successfully. Processing started."


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _submittal_list(submittals: list[Submittal]) -> list[dict[str, object]]:
    return [submittal.to_dict() for submittal in submittals]


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    container = _container(request)
    settings = container.settings
    return {
        "status": "healthy",
        "ai_provider": settings.provider_label,
        "model": settings.model_name,
        "db": container.database.status(),
        "ts": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/api/summarize")
def summarize(request: Request, pdf: UploadFile | None = File(None)) -> dict[str, Any]:
    container = _container(request)
    pdf_name, pdf_bytes = read_pdf_upload(pdf, container.settings.max_upload_size_bytes)
    Log.info(f"Received {pdf_name} ({len(pdf_bytes)} bytes)")

    if not container.settings.is_async:
        record = container.processor.summarize(pdf_name, pdf_bytes)
        return {
            "success": True,
            "_id": record.id,
            "pdfName": record.pdf_name,
            "fields": record.fields,
            "submittals": _submittal_list(record.submittals),
            "status": record.status,
        }

    record, job = container.processor.prepare_job(pdf_name, pdf_bytes)
    container.worker.submit(job)
    return {
        "success": True,
        "_id": record.id,
        "pdfName": record.pdf_name,
        "status": STATUS_PENDING,
        "message": ASYNC_ACCEPTED_MESSAGE,
    }


@router.get("/api/status/{contract_id}")
def contract_status(contract_id: str, request: Request) -> dict[str, Any]:
    record = _container(request).contract_repo.find_by_id(contract_id)
    return {
        "success": True,
        "_id": record.id,
        "pdfName": record.pdf_name,
        "status": record.status,
        "errorMessage": record.error_message,
        "hasFields": record.has_fields,
        "hasSubmittals": record.has_submittals,
    }


@router.get("/api/summarize/{contract_id}")
def contract_fields(contract_id: str, request: Request) -> dict[str, Any]:
    record = _container(request).contract_repo.find_by_id(contract_id)
    return {
        "success": True,
        "fields": record.fields,
        "pdfName": record.pdf_name,
        "status": record.status,
    }


@router.get("/api/submittals/{contract_id}")
def contract_submittals(contract_id: str, request: Request) -> dict[str, Any]:
    record = _container(request).contract_repo.find_by_id(contract_id)
    return {
        "success": True,
        "submittals": _submittal_list(record.submittals),
        "pdfName": record.pdf_name,
        "status": record.status,
    }


@router.post("/api/submittals/{contract_id}")
def extract_submittals(
    contract_id: str,
    request: Request,
    pdf: UploadFile | None = File(None),
) -> dict[str, Any]:
    container = _container(request)
    pdf_name: str | None = None
    pdf_bytes: bytes | None = None
    if pdf is not None and pdf.filename:
        pdf_name, pdf_bytes = read_pdf_upload(pdf, container.settings.max_upload_size_bytes)
    elif pdf is not None:
        pdf.file.close()
    submittals = container.processor.submittals_for(contract_id, pdf_bytes, pdf_name)
    return {"success": True, "submittals": _submittal_list(submittals)}


@router.get("/api/history")
def history(request: Request) -> dict[str, Any]:
    summaries = _container(request).contract_repo.list_summaries()
    return {
        "success": True,
        "files": [
            {
                "_id": summary.id,
                "pdfName": summary.pdf_name,
                "createdAt": summary.created_at.isoformat() if summary.created_at else None,
                "status": summary.status,
            }
            for summary in summaries
        ],
    }
