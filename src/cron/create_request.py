"""Build the gateway request body for creating a cron job from form values."""

from typing import Literal, Optional
import logging

from .expression import validate_cron
from .payloads import CamelModel

logger = logging.getLogger(__name__)


class CronRequestError(ValueError):
    """Raised when form values cannot be turned into a create request."""


class CronCreateForm(CamelModel):
    name: str = ""
    enabled: bool = True
    schedule_kind: Literal["cron", "every", "at"] = "cron"
    cron_expr: str = ""
    every: str = ""
    at: str = ""
    tz: str = ""
    stagger: str = ""
    exact: bool = False
    payload_kind: Literal["agentTurn", "systemEvent"] = "agentTurn"
    payload_text: str = ""
    session_target: Literal["isolated", "main"] = "isolated"
    wake_mode: Literal["now", "next-heartbeat"] = "now"
    delivery_mode: Literal["none", "announce", "webhook"] = "none"
    delivery_channel: str = ""
    delivery_to: str = ""
    delivery_best_effort: bool = False


class CronCreateSchedule(CamelModel):
    kind: Literal["cron", "every", "at"]
    expr: Optional[str] = None
    every: Optional[str] = None
    at: Optional[str] = None
    tz: Optional[str] = None
    stagger: Optional[str] = None
    exact: Optional[bool] = None


class CronCreatePayload(CamelModel):
    kind: Literal["agentTurn", "systemEvent"]
    text: str


class CronCreateDelivery(CamelModel):
    mode: Literal["none", "announce", "webhook"]
    channel: Optional[str] = None
    to: Optional[str] = None
    best_effort: Optional[bool] = None


class CronCreateBody(CamelModel):
    name: str
    enabled: bool
    schedule: CronCreateSchedule
    payload: CronCreatePayload
    session_target: Literal["isolated", "main"]
    wake_mode: Literal["now", "next-heartbeat"]
    delivery: CronCreateDelivery


def _build_schedule(values: CronCreateForm) -> CronCreateSchedule:
    schedule = CronCreateSchedule(kind=values.schedule_kind)

    if values.schedule_kind == "cron":
        expr = values.cron_expr.strip()
        if not expr:
            raise CronRequestError("Cron expression is required")
        if not validate_cron(expr):
            raise CronRequestError("Invalid cron expression")
        schedule.expr = expr
        if values.tz.strip():
            schedule.tz = values.tz.strip()
        if values.stagger.strip():
            schedule.stagger = values.stagger.strip()
        if values.exact:
            schedule.exact = True
    elif values.schedule_kind == "every":
        every = values.every.strip()
        if not every:
            raise CronRequestError("Every interval is required")
        schedule.every = every
    else:
        at = values.at.strip()
        if not at:
            raise CronRequestError("At value is required")
        schedule.at = at

    return schedule


def build_cron_create_body(values: CronCreateForm) -> CronCreateBody:
    """Validate form values and build the create request body.

    Args:
        values: Raw form values

    Returns:
        Request body ready to send to the gateway

    Raises:
        CronRequestError: If the values are incomplete or inconsistent
    """
    name = values.name.strip()
    if not name:
        raise CronRequestError("Name is required")

    payload_text = values.payload_text.strip()
    if not payload_text:
        raise CronRequestError("Payload text is required")

    if values.session_target == "main" and values.payload_kind != "systemEvent":
        raise CronRequestError("Main session jobs must use systemEvent payload")

    if values.session_target == "isolated" and values.payload_kind != "agentTurn":
        raise CronRequestError("Isolated session jobs must use agentTurn payload")

    if values.session_target != "isolated" and values.delivery_mode != "none":
        raise CronRequestError("Delivery mode announce/webhook requires isolated session")

    schedule = _build_schedule(values)

    delivery = CronCreateDelivery(mode=values.delivery_mode)
    if values.delivery_channel.strip():
        delivery.channel = values.delivery_channel.strip()
    if values.delivery_to.strip():
        delivery.to = values.delivery_to.strip()
    if values.delivery_best_effort:
        delivery.best_effort = True

    logger.debug(f"Built cron create body for '{name}' ({schedule.kind})")

    return CronCreateBody(
        name=name,
        enabled=values.enabled,
        schedule=schedule,
        payload=CronCreatePayload(kind=values.payload_kind, text=payload_text),
        session_target=values.session_target,
        wake_mode=values.wake_mode,
        delivery=delivery,
    )
