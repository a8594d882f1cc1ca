"""
Fancy performance calculator API.

POST /api/calculator/upload      - Upload a scanner .txt export, get normalized fields
POST /api/calculator/parse-text  - Same, for pasted export text
POST /api/calculator/grades      - Resolve KGS / Bowtie / Fish-Eye grades
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from .. import schemas
from ..config import settings
from ..database import get_db
from ..field_mapper import compute_normalized_fields
from ..grading import resolve_grades
from ..lookup import LookupFailure, SqlLookupSource
from ..measurements import decode_export

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculator", tags=["calculator"])


def _normalized_response(text: str, shape: Optional[str]) -> dict:
    fields = compute_normalized_fields(text, shape_override=shape or None)
    return {"shape": fields["shape"], "fields": fields}


@router.post("/upload", response_model=schemas.NormalizedFields)
def upload_export(
    file: UploadFile = File(...),
    shape: Optional[str] = Form(None),
):
    """
    Upload a KEY=VALUE measurement export and return the normalized fields
    for the detected (or explicitly chosen) shape.
    """
    if not file.filename or not file.filename.lower().endswith(".txt"):
        raise HTTPException(status_code=400, detail="File must be a .txt export")

    data = file.file.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {len(data)} bytes (max {settings.MAX_UPLOAD_BYTES})",
        )

    return _normalized_response(decode_export(data), shape)


@router.post("/parse-text", response_model=schemas.NormalizedFields)
def parse_text(request: schemas.ParseTextRequest):
    """Normalize pasted export text."""
    if not request.text or not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is empty")
    return _normalized_response(request.text, request.shape)


@router.post("/grades", response_model=schemas.GradeResponse)
def grades(request: schemas.GradeRequest, db: Session = Depends(get_db)):
    """
    Resolve grades for one set of proportions.

    Missing proportions or an ungraded shape give all-null grades. Only a
    failure of the KGS table lookup is an error (503).
    """
    lookup = SqlLookupSource(db)
    try:
        result = resolve_grades(
            lookup,
            table_width=request.tableWidth,
            crown_angle=request.crown,
            pavilion_depth=request.pavilionDepth,
            shape=request.shape,
            halves_angle_avg=request.halvesAngleAvg,
        )
    except LookupFailure as e:
        logger.error("Grade lookup failed for %s: %s", request.shape, e)
        raise HTTPException(status_code=503, detail="Grade tables unavailable")
    return result.to_dict()
