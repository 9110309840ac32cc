"""Normalizers for cron payloads returned by the gateway CLI.

The CLI may return either raw arrays or wrapped objects. These helpers turn
whatever comes back into stable DTOs; malformed fields fall back to defaults
instead of raising.
"""

import math
from datetime import datetime, timezone
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CronSchedule(CamelModel):
    kind: Literal["at", "every", "cron"]
    at_ms: Optional[Number] = None
    every_ms: Optional[Number] = None
    expr: Optional[str] = None
    tz: Optional[str] = None
    stagger_ms: Optional[Number] = None
    exact: Optional[bool] = None


class CronPayload(CamelModel):
    kind: Literal["systemEvent", "agentTurn"]
    text: Optional[str] = None
    message: Optional[str] = None
    deliver: Optional[bool] = None
    channel: Optional[str] = None
    to: Optional[str] = None
    best_effort_deliver: Optional[bool] = None


class CronDelivery(CamelModel):
    mode: Literal["none", "announce", "webhook"]
    channel: Optional[str] = None
    to: Optional[str] = None
    best_effort: Optional[bool] = None


class CronJobState(CamelModel):
    next_run_at_ms: Optional[Number] = None
    running_at_ms: Optional[Number] = None
    last_run_at_ms: Optional[Number] = None
    last_status: Optional[str] = None
    last_error: Optional[str] = None
    last_duration_ms: Optional[Number] = None
    run_count: Optional[Number] = None


class CronJob(CamelModel):
    id: str
    name: str
    schedule: CronSchedule
    session_target: Literal["main", "isolated"]
    wake_mode: Literal["now", "next-heartbeat"]
    payload: CronPayload
    agent_id: Optional[str] = None
    description: Optional[str] = None
    enabled: Optional[bool] = None
    delete_after_run: Optional[bool] = None
    delivery: Optional[CronDelivery] = None
    state: Optional[CronJobState] = None
    created_at_ms: Optional[Number] = None
    updated_at_ms: Optional[Number] = None
    last_run_at: Optional[str] = None
    next_run_at: Optional[str] = None
    last_status: Optional[Literal["success", "failed", "running"]] = None
    run_count: Optional[Number] = None


class CronStatus(CamelModel):
    enabled: bool
    jobs: Number
    next_wake_at_ms: Optional[Number] = None
    store_path: Optional[str] = None
    # Compatibility fields for callers that still read the old keys
    running: Optional[bool] = None
    job_count: Optional[Number] = None
    next_run: Optional[str] = None
    last_run: Optional[str] = None
    uptime: Optional[Number] = None


class CronRun(CamelModel):
    id: str
    job_id: str
    started_at: str
    ended_at: Optional[str] = None
    status: Literal["success", "failed", "running", "skipped"]
    duration_ms: Optional[Number] = None
    exit_code: Optional[Number] = None
    error: Optional[str] = None
    output: Optional[str] = None


def _as_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value)
        except ValueError:
            return None
        if not math.isfinite(parsed):
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def _as_boolean(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_record(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) else None


def _first(*values):
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def to_iso_from_ms(value: Optional[Number]) -> Optional[str]:
    """Format epoch milliseconds as an ISO-8601 UTC timestamp."""
    if value is None:
        return None
    try:
        moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_ms(value: Optional[str]) -> Optional[int]:
    """Parse an ISO-8601 timestamp into epoch milliseconds."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def _normalize_schedule(value: Any) -> CronSchedule:
    schedule = _as_record(value) or {}
    kind = _as_string(schedule.get("kind"))
    if kind not in ("at", "every", "cron"):
        kind = "cron"

    if kind == "at":
        return CronSchedule(
            kind=kind,
            at_ms=_first(_as_number(schedule.get("atMs")), parse_iso_ms(_as_string(schedule.get("at")))),
        )

    if kind == "every":
        return CronSchedule(kind=kind, every_ms=_as_number(schedule.get("everyMs")))

    return CronSchedule(
        kind=kind,
        expr=_as_string(schedule.get("expr")),
        tz=_as_string(schedule.get("tz")),
        stagger_ms=_first(_as_number(schedule.get("staggerMs")), _as_number(schedule.get("stagger"))),
        exact=_as_boolean(schedule.get("exact")),
    )


def _normalize_delivery(value: Any) -> Optional[CronDelivery]:
    delivery = _as_record(value)
    if delivery is None:
        return None

    mode = delivery.get("mode")
    if mode not in ("none", "announce", "webhook"):
        return None

    return CronDelivery(
        mode=mode,
        channel=_as_string(delivery.get("channel")),
        to=_as_string(delivery.get("to")),
        best_effort=_as_boolean(delivery.get("bestEffort")),
    )


def _normalize_payload(value: Any, delivery: Optional[CronDelivery] = None) -> CronPayload:
    payload = _as_record(value) or {}

    if _as_string(payload.get("kind")) == "systemEvent":
        return CronPayload(kind="systemEvent", text=_as_string(payload.get("text")))

    return CronPayload(
        kind="agentTurn",
        message=_first(_as_string(payload.get("message")), _as_string(payload.get("text"))),
        deliver=_as_boolean(payload.get("deliver")),
        channel=_first(_as_string(payload.get("channel")), delivery.channel if delivery else None),
        to=_first(_as_string(payload.get("to")), delivery.to if delivery else None),
        best_effort_deliver=_first(
            _as_boolean(payload.get("bestEffortDeliver")),
            delivery.best_effort if delivery else None,
        ),
    )


def _normalize_job_state(value: Any) -> Optional[CronJobState]:
    state = _as_record(value)
    if state is None:
        return None

    return CronJobState(
        next_run_at_ms=_as_number(state.get("nextRunAtMs")),
        running_at_ms=_as_number(state.get("runningAtMs")),
        last_run_at_ms=_as_number(state.get("lastRunAtMs")),
        last_status=_as_string(state.get("lastStatus")),
        last_error=_as_string(state.get("lastError")),
        last_duration_ms=_as_number(state.get("lastDurationMs")),
        run_count=_as_number(state.get("runCount")),
    )


def _normalize_job_status(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    normalized = value.lower()
    if normalized in ("ok", "success"):
        return "success"
    if normalized == "running":
        return "running"
    return "failed"


def _normalize_run_status(value: Optional[str]) -> str:
    normalized = (value or "").lower()
    if normalized in ("ok", "success"):
        return "success"
    if normalized in ("running", "skipped"):
        return normalized
    return "failed"


def _normalize_job(value: Any) -> Optional[CronJob]:
    job = _as_record(value)
    if job is None:
        return None

    job_id = _as_string(job.get("id"))
    if not job_id:
        return None

    state = _normalize_job_state(job.get("state"))
    delivery = _normalize_delivery(job.get("delivery"))
    last_run_at_ms = _first(
        state.last_run_at_ms if state else None,
        parse_iso_ms(_as_string(job.get("lastRunAt"))),
    )
    next_run_at_ms = _first(
        state.next_run_at_ms if state else None,
        parse_iso_ms(_as_string(job.get("nextRunAt"))),
    )
    enabled = _as_boolean(job.get("enabled"))

    return CronJob(
        id=job_id,
        name=_as_string(job.get("name")) or job_id,
        schedule=_normalize_schedule(job.get("schedule")),
        session_target="main" if job.get("sessionTarget") == "main" else "isolated",
        wake_mode="next-heartbeat" if job.get("wakeMode") == "next-heartbeat" else "now",
        payload=_normalize_payload(job.get("payload"), delivery),
        agent_id=_as_string(job.get("agentId")),
        description=_as_string(job.get("description")),
        enabled=True if enabled is None else enabled,
        delete_after_run=_as_boolean(job.get("deleteAfterRun")),
        delivery=delivery,
        state=state,
        created_at_ms=_as_number(job.get("createdAtMs")),
        updated_at_ms=_as_number(job.get("updatedAtMs")),
        last_run_at=to_iso_from_ms(last_run_at_ms),
        next_run_at=to_iso_from_ms(next_run_at_ms),
        last_status=_normalize_job_status(
            _first(state.last_status if state else None, _as_string(job.get("lastStatus")))
        ),
        run_count=_first(state.run_count if state else None, _as_number(job.get("runCount"))),
    )


def normalize_cron_jobs_payload(value: Any) -> List[CronJob]:
    """Normalize a jobs listing (raw list or ``{"jobs": [...]}``)."""
    if isinstance(value, list):
        entries = value
    elif isinstance(value, dict) and isinstance(value.get("jobs"), list):
        entries = value["jobs"]
    else:
        entries = []

    jobs = [_normalize_job(entry) for entry in entries]
    return [job for job in jobs if job is not None]


def normalize_cron_status_payload(value: Any) -> CronStatus:
    """Normalize a scheduler status object, filling old and new key names."""
    status = _as_record(value) or {}

    enabled = _first(_as_boolean(status.get("enabled")), _as_boolean(status.get("running")), False)
    jobs = _first(_as_number(status.get("jobs")), _as_number(status.get("jobCount")), 0)
    next_wake_at_ms = _first(
        _as_number(status.get("nextWakeAtMs")),
        parse_iso_ms(_as_string(status.get("nextRun"))),
    )

    return CronStatus(
        enabled=enabled,
        jobs=jobs,
        next_wake_at_ms=next_wake_at_ms,
        store_path=_as_string(status.get("storePath")),
        running=enabled,
        job_count=jobs,
        next_run=_first(to_iso_from_ms(next_wake_at_ms), _as_string(status.get("nextRun"))),
        last_run=_as_string(status.get("lastRun")),
        uptime=_as_number(status.get("uptime")),
    )


def _normalize_run_entry(value: Any, index: int, fallback_job_id: str) -> Optional[CronRun]:
    entry = _as_record(value)
    if entry is None:
        return None

    job_id = _as_string(entry.get("jobId")) or fallback_job_id
    started_at_ms = _first(
        _as_number(entry.get("startedAtMs")),
        _as_number(entry.get("runAtMs")),
        _as_number(entry.get("ts")),
        parse_iso_ms(_as_string(entry.get("startedAt"))),
    )
    started_at = (
        _as_string(entry.get("startedAt"))
        or to_iso_from_ms(started_at_ms)
        or to_iso_from_ms(datetime.now(timezone.utc).timestamp() * 1000)
    )
    duration_ms = _as_number(entry.get("durationMs"))
    ended_at_ms = _as_number(entry.get("endedAtMs"))
    if ended_at_ms is None and started_at_ms is not None and duration_ms is not None:
        ended_at_ms = started_at_ms + duration_ms

    run_id = (
        _as_string(entry.get("id"))
        or _as_string(entry.get("runId"))
        or f"{job_id}:{started_at_ms if started_at_ms is not None else index}"
    )

    return CronRun(
        id=run_id,
        job_id=job_id,
        started_at=started_at,
        ended_at=_as_string(entry.get("endedAt")) or to_iso_from_ms(ended_at_ms),
        status=_normalize_run_status(_as_string(entry.get("status"))),
        duration_ms=duration_ms,
        exit_code=_as_number(entry.get("exitCode")),
        error=_as_string(entry.get("error")),
        output=_as_string(entry.get("output")) or _as_string(entry.get("summary")),
    )


def normalize_cron_runs_payload(value: Any, fallback_job_id: str = "") -> List[CronRun]:
    """Normalize a run history (raw list, ``{"entries": [...]}`` or ``{"runs": [...]}``)."""
    if isinstance(value, list):
        entries = value
    elif isinstance(value, dict) and isinstance(value.get("entries"), list):
        entries = value["entries"]
    elif isinstance(value, dict) and isinstance(value.get("runs"), list):
        entries = value["runs"]
    else:
        entries = []

    runs = [_normalize_run_entry(entry, index, fallback_job_id) for index, entry in enumerate(entries)]
    return [run for run in runs if run is not None]
