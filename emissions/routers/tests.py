# emissions/routers/tests.py
"""Recent test results and plate / certificate number search."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from emissions.database import get_db
from emissions.schemas.test_result import TestRecordOut
from emissions.services import record_store

router = APIRouter()


@router.get("/tests", response_model=list[TestRecordOut], summary="Recent test results")
def get_recent_tests(
    limit: int = Query(record_store.DEFAULT_RECENT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Returns test results joined with their vehicles, newest first."""
    return record_store.get_recent(db, limit)


@router.get("/tests/search", response_model=list[TestRecordOut], summary="Search by plate or certificate number")
def search_tests(q: Optional[str] = None, db: Session = Depends(get_db)):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return record_store.search(db, q)
