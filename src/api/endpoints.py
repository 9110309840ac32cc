"""API endpoints for cron expression and payload helpers."""

from fastapi import APIRouter, Body, HTTPException, Query
from typing import Any, Optional
from pydantic import BaseModel
import logging

from cron import (
    CronCreateForm,
    CronRequestError,
    build_cron_create_body,
    describe_cron,
    next_run_time,
    normalize_cron_expression,
    normalize_cron_jobs_payload,
    normalize_cron_runs_payload,
    normalize_cron_status_payload,
    validate_cron,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CronExpressionRequest(BaseModel):
    expr: Optional[str] = None


@router.post("/cron/normalize")
async def normalize_expression(request: CronExpressionRequest):
    """Normalize a 5- or 6-field cron expression and describe it."""
    normalized = normalize_cron_expression(request.expr)
    valid = validate_cron(normalized) if normalized else False
    next_run = next_run_time(normalized) if valid else None

    return {
        "expr": request.expr,
        "normalized": normalized,
        "valid": valid,
        "description": describe_cron(normalized) if normalized else None,
        "next_run": next_run.isoformat() if next_run else None
    }


@router.post("/cron/jobs/normalize")
async def normalize_jobs(payload: Any = Body(None)):
    """Normalize a raw cron jobs payload from the gateway."""
    jobs = normalize_cron_jobs_payload(payload)
    return {"jobs": [job.to_dict() for job in jobs]}


@router.post("/cron/status/normalize")
async def normalize_status(payload: Any = Body(None)):
    """Normalize a raw cron status payload from the gateway."""
    return normalize_cron_status_payload(payload).to_dict()


@router.post("/cron/runs/normalize")
async def normalize_runs(payload: Any = Body(None), job_id: str = Query("")):
    """Normalize a raw cron run history payload from the gateway."""
    runs = normalize_cron_runs_payload(payload, fallback_job_id=job_id)
    return {"runs": [run.to_dict() for run in runs]}


@router.post("/cron/jobs/create-body")
async def create_job_body(values: CronCreateForm):
    """Validate cron form values and build the gateway create request."""
    try:
        body = build_cron_create_body(values)
    except CronRequestError as e:
        logger.info(f"Rejected cron create request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return body.to_dict()
