# emissions/routers/certificates.py
"""Certificate PDF download by test result id."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
from emissions.database import get_db
from emissions.services import record_store
from emissions.services.certificate_renderer import certificate_filename, render_certificate_pdf

router = APIRouter()


@router.get("/certificate/{test_id}", summary="Download certificate PDF")
def download_certificate(test_id: int, db: Session = Depends(get_db)):
    test = record_store.get_by_test_id(db, test_id)
    if not test:
        raise HTTPException(status_code=404, detail="Certificate not found")

    pdf_bytes = render_certificate_pdf(test)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{certificate_filename(test.certificate_number)}"',
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "Pragma": "no-cache",
            "Expires": "0",
        },
    )
