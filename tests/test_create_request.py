"""Tests for the cron create request builder."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cron import CronCreateForm, CronRequestError, build_cron_create_body


def make_form(**overrides):
    values = {
        "name": "Nightly report",
        "schedule_kind": "cron",
        "cron_expr": "0 2 * * *",
        "payload_kind": "agentTurn",
        "payload_text": "Write the nightly report",
        "session_target": "isolated",
    }
    values.update(overrides)
    return CronCreateForm(**values)


class TestBuildCronCreateBody:
    """Test building the create request body."""

    def test_minimal_cron_job(self):
        body = build_cron_create_body(make_form(name="  Nightly report  ")).to_dict()

        assert body == {
            "name": "Nightly report",
            "enabled": True,
            "schedule": {"kind": "cron", "expr": "0 2 * * *"},
            "payload": {"kind": "agentTurn", "text": "Write the nightly report"},
            "sessionTarget": "isolated",
            "wakeMode": "now",
            "delivery": {"mode": "none"},
        }

    def test_optional_cron_fields_and_delivery(self):
        body = build_cron_create_body(make_form(
            cron_expr=" 0 0 2 * * * ",
            tz=" Europe/Berlin ",
            stagger="30s",
            exact=True,
            delivery_mode="announce",
            delivery_channel="slack",
            delivery_to=" #ops ",
            delivery_best_effort=True,
        )).to_dict()

        assert body["schedule"] == {
            "kind": "cron",
            "expr": "0 0 2 * * *",
            "tz": "Europe/Berlin",
            "stagger": "30s",
            "exact": True,
        }
        assert body["delivery"] == {"mode": "announce", "channel": "slack", "to": "#ops", "bestEffort": True}

    def test_every_and_at_schedules(self):
        every = build_cron_create_body(make_form(schedule_kind="every", every=" 15m ")).to_dict()
        at = build_cron_create_body(make_form(schedule_kind="at", at="2024-06-01T09:00:00Z")).to_dict()

        assert every["schedule"] == {"kind": "every", "every": "15m"}
        assert at["schedule"] == {"kind": "at", "at": "2024-06-01T09:00:00Z"}

    def test_main_session_system_event(self):
        body = build_cron_create_body(make_form(
            session_target="main",
            payload_kind="systemEvent",
            wake_mode="next-heartbeat",
        ))

        assert body.session_target == "main"
        assert body.payload.kind == "systemEvent"
        assert body.wake_mode == "next-heartbeat"

    def test_accepts_camel_case_form_keys(self):
        form = CronCreateForm(**{
            "name": "Ping",
            "scheduleKind": "every",
            "every": "1h",
            "payloadText": "ping",
        })
        assert build_cron_create_body(form).schedule.every == "1h"

    @pytest.mark.parametrize("overrides,message", [
        ({"name": "  "}, "Name is required"),
        ({"payload_text": ""}, "Payload text is required"),
        ({"session_target": "main"}, "Main session jobs must use systemEvent payload"),
        ({"payload_kind": "systemEvent"}, "Isolated session jobs must use agentTurn payload"),
        ({"session_target": "main", "payload_kind": "systemEvent", "delivery_mode": "webhook"},
         "Delivery mode announce/webhook requires isolated session"),
        ({"cron_expr": "   "}, "Cron expression is required"),
        ({"cron_expr": "* * *"}, "Invalid cron expression"),
        ({"cron_expr": "61 * * * *"}, "Invalid cron expression"),
        ({"schedule_kind": "every"}, "Every interval is required"),
        ({"schedule_kind": "at"}, "At value is required"),
    ])
    def test_rejections(self, overrides, message):
        with pytest.raises(CronRequestError, match=message):
            build_cron_create_body(make_form(**overrides))

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_cron_create_body(make_form(name=""))
