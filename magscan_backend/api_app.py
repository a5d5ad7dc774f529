from __future__ import annotations

import io
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from .engine import process_main_folder, summarize
from .outputs import XLSX_MEDIA_TYPE, report_xlsx_bytes
from .settings import DEFAULT_SETTINGS, ScanSettings

logger = logging.getLogger(__name__)


app = FastAPI(
    title="File Processing API",
    version="1.0.0",
    description="API to process files and return an Excel file.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_settings: ScanSettings = DEFAULT_SETTINGS

MISSING_PATH_ERROR = "mainFolderPath is required in the request body."
GENERIC_ERROR = "An error occurred while processing the request."


# ============================================================================
# Request Models
# ============================================================================

class FilesRequest(BaseModel):
    mainFolderPath: Optional[str] = None


def _missing_path(body: Optional[FilesRequest]) -> bool:
    return body is None or not body.mainFolderPath


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/health")
def health():
    """Simple health check endpoint"""
    return {"ok": True, "status": "running"}


@app.post("/files")
def process_files(body: Optional[FilesRequest] = None):
    """
    Process files in the given path and return an Excel file.

    400 when mainFolderPath is missing, 500 when the folder tree cannot be scanned.
    """
    if _missing_path(body):
        return JSONResponse({"error": MISSING_PATH_ERROR}, status_code=400)

    try:
        index = process_main_folder(body.mainFolderPath, _settings)
        data = report_xlsx_bytes(index)
    except Exception:
        logger.exception("[ERROR] /files failed for %s", body.mainFolderPath)
        return JSONResponse({"error": GENERIC_ERROR}, status_code=500)

    return StreamingResponse(
        io.BytesIO(data),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=results.xlsx"},
    )


@app.post("/files/preview")
def preview_files(body: Optional[FilesRequest] = None):
    """Same scan as /files, returned as JSON grouped by modification date."""
    if _missing_path(body):
        return JSONResponse({"error": MISSING_PATH_ERROR}, status_code=400)

    try:
        index = process_main_folder(body.mainFolderPath, _settings)
    except Exception:
        logger.exception("[ERROR] /files/preview failed for %s", body.mainFolderPath)
        return JSONResponse({"error": GENERIC_ERROR}, status_code=500)

    _, count = summarize(index)
    return {
        "dates": {d: [r.to_dict() for r in records] for d, records in index.items()},
        "count": count,
    }
