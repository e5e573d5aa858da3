from __future__ import annotations

import json

from lib_log_datadog.domain.options import EventOptions, EventPayload, default_event_options


def test_default_event_options_values() -> None:
    options = default_event_options(hostname="web01", environment="prod")

    assert options == EventOptions(
        host="web01",
        tags=["env:prod"],
        title="LOG",
        priority="normal",
        date_happened=None,
        alert_type="warning",
        aggregation_key=None,
        source_type_name=None,
    )


def test_default_environment_is_local() -> None:
    assert default_event_options(hostname="h").tags == ["env:local"]
    assert default_event_options(hostname="h", environment="").tags == ["env:local"]


def test_factory_returns_independent_tag_lists() -> None:
    first = default_event_options(hostname="h", environment="dev")
    second = default_event_options(hostname="h", environment="dev")

    first.tags.append("team:core")

    assert second.tags == ["env:dev"]
    assert first.tags is not second.tags


def test_copy_allocates_new_tags() -> None:
    options = default_event_options(hostname="h", environment="dev")
    snapshot = options.copy()

    snapshot.tags.append("extra")
    snapshot.title = "changed"

    assert options.tags == ["env:dev"]
    assert options.title == "LOG"


def test_payload_snapshots_template() -> None:
    options = default_event_options(hostname="h", environment="dev")
    payload = EventPayload.from_options(options, alert_type="error", text="boom")

    options.tags.append("late")
    options.title = "late"

    assert payload.tags == ("env:dev",)
    assert payload.title == "LOG"
    assert payload.alert_type == "error"


def test_payload_title_override() -> None:
    options = default_event_options(hostname="h")
    payload = EventPayload.from_options(options, alert_type="info", text="t", title="custom")

    assert payload.title == "custom"


def test_payload_json_shape() -> None:
    options = default_event_options(hostname="h", environment="dev")
    options.aggregation_key = "agg"
    payload = EventPayload.from_options(options, alert_type="info", text="hello")

    decoded = json.loads(payload.to_json())

    assert decoded == {
        "title": "LOG",
        "priority": "normal",
        "date_happened": None,
        "host": "h",
        "tags": ["env:dev"],
        "alert_type": "info",
        "aggregation_key": "agg",
        "source_type_name": None,
        "text": "hello",
    }
