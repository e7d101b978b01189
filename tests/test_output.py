"""Tests for JSON output and API injection."""

import json
from datetime import date

import httpx

from demogen.engine import GenerationEngine
from demogen.output import inject_to_api, to_payload, write_json
from demogen.presets import INTERMEDIATE

REFERENCE = date(2026, 3, 1)


def _result(weeks: int = 4):
    return GenerationEngine(11).run(INTERMEDIATE, weeks=weeks, reference_date=REFERENCE)


class TestPayload:
    def test_json_serializable(self):
        payload = to_payload(_result())
        text = json.dumps(payload, ensure_ascii=False)
        assert json.loads(text) == payload

    def test_profile_fields(self):
        profile = to_payload(_result())["profile"]
        assert profile["display_name"] == "דניאל כהן"
        assert profile["equipment"] == sorted(profile["equipment"])
        assert "bmi" in profile

    def test_dates_are_iso(self):
        timeline = to_payload(_result())["timeline"]
        assert timeline["reference_date"] == "2026-03-01"
        session = timeline["sessions"][0]
        assert session["start_time"].startswith("2026-")
        assert session["start_time"].endswith("+00:00")
        assert "duration_display" in session

    def test_exercises_flattened(self):
        session = to_payload(_result())["timeline"]["sessions"][0]
        entry = session["exercises"][0]
        assert set(entry["exercise"]) == {"exercise_id", "name", "category"}
        assert isinstance(entry["sets"], list)


class TestWriteJson:
    def test_write(self, tmp_path):
        result = _result()
        path = tmp_path / "demo.json"
        n = write_json(result, path)
        assert n == len(result.timeline.sessions)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["profile"]["id"] == result.profile.id


class TestInjectToApi:
    def test_posts_profile_then_batches(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(201, json={"ok": True})

        result = _result(weeks=8)
        summary = inject_to_api(
            result, "http://api.test", "demo_key", batch_size=10,
            retry_delay=0, transport=httpx.MockTransport(handler),
        )
        n_sessions = len(result.timeline.sessions)
        assert summary["errors"] == []
        assert summary["sessions"] == n_sessions
        assert summary["batches"] == -(-n_sessions // 10)
        assert requests[0].url.path == "/v1/demo-users"
        assert requests[0].headers["Authorization"] == "Bearer demo_key"
        assert all(
            r.url.path == f"/v1/demo-users/{result.profile.id}/sessions/batch" for r in requests[1:]
        )
        sent = sum(len(json.loads(r.content)["sessions"]) for r in requests[1:])
        assert sent == n_sessions

    def test_retries_on_rate_limit(self):
        calls = {"n": 0}

        def handler(request):
            calls["n"] += 1
            if calls["n"] == 1:
                return httpx.Response(429)
            return httpx.Response(201)

        summary = inject_to_api(
            _result(), "http://api.test", "k", retry_delay=0, transport=httpx.MockTransport(handler),
        )
        assert summary["errors"] == []

    def test_profile_failure_skips_sessions(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(500, text="boom")

        summary = inject_to_api(
            _result(), "http://api.test", "k", retry_delay=0, transport=httpx.MockTransport(handler),
        )
        assert len(requests) == 1
        assert summary["batches"] == 0
        assert len(summary["errors"]) == 1
        assert "HTTP 500" in summary["errors"][0]

    def test_transport_errors_collected(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        summary = inject_to_api(
            _result(), "http://api.test", "k", retry_delay=0, transport=httpx.MockTransport(handler),
        )
        assert len(summary["errors"]) == 1
        assert "connection refused" in summary["errors"][0]
