"""Cron expression helpers and gateway payload normalizers."""

from .expression import describe_cron, next_run_time, normalize_cron_expression, validate_cron
from .payloads import (
    normalize_cron_jobs_payload,
    normalize_cron_runs_payload,
    normalize_cron_status_payload,
)
from .create_request import CronCreateForm, CronRequestError, build_cron_create_body

__all__ = [
    "describe_cron",
    "next_run_time",
    "normalize_cron_expression",
    "validate_cron",
    "normalize_cron_jobs_payload",
    "normalize_cron_runs_payload",
    "normalize_cron_status_payload",
    "CronCreateForm",
    "CronRequestError",
    "build_cron_create_body",
]
