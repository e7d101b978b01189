"""Output handlers — JSON file and API injection.

The engine returns frozen dataclasses; to_payload() flattens a
GenerationResult into plain JSON types:
    dates/datetimes → ISO-8601 strings, equipment sets → sorted lists,
    exercises → their catalog id and display name.

Persistence belongs to the receiving service. inject_to_api() posts the
profile to POST /v1/demo-users and the sessions to
POST /v1/demo-users/{id}/sessions/batch.
"""

from __future__ import annotations

import dataclasses
import json
import time
from datetime import date, datetime
from pathlib import Path
from typing import Any

import httpx

from demogen.duration import format_duration
from demogen.engine import GenerationResult
from demogen.exercises import Exercise
from demogen.models import Profile, WorkoutSession

MAX_ATTEMPTS = 5


def _jsonable(value: Any) -> Any:
    if isinstance(value, Exercise):
        return {"exercise_id": value.exercise_id, "name": value.name, "category": value.category}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def profile_payload(profile: Profile) -> dict:
    data = _jsonable(profile)
    data["bmi"] = profile.bmi
    data["estimated_body_fat_pct"] = profile.estimated_body_fat_pct
    data["estimated_vo2max"] = profile.estimated_vo2max
    return data


def session_payload(session: WorkoutSession) -> dict:
    data = _jsonable(session)
    data["duration_display"] = format_duration(session.duration_seconds)
    return data


def to_payload(result: GenerationResult) -> dict:
    """Convert a generation result to a JSON-ready dict."""
    timeline = result.timeline
    return {
        "profile": profile_payload(result.profile),
        "timeline": {
            "start_date": timeline.start_date.isoformat(),
            "reference_date": timeline.reference_date.isoformat(),
            "sessions": [session_payload(s) for s in timeline.sessions],
            "measurements": _jsonable(timeline.measurements),
            "achievements": _jsonable(timeline.achievements),
        },
        "stats": _jsonable(result.stats),
        "congratulation": result.congratulation,
    }


def write_json(result: GenerationResult, output_path: str | Path) -> int:
    """Write a generation result to a JSON file.

    Returns the number of sessions written.
    """
    path = Path(output_path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(to_payload(result), f, indent=2, ensure_ascii=False)
    return len(result.timeline.sessions)


def _post(
    client: httpx.Client,
    url: str,
    payload: dict,
    headers: dict,
    label: str,
    errors: list[str],
    retry_delay: float,
) -> bool:
    """POST with retries on 429 and transport errors; failures land in ``errors``."""
    for attempt in range(MAX_ATTEMPTS):
        try:
            resp = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            if attempt == MAX_ATTEMPTS - 1:
                errors.append(f"{label}: {e}")
                return False
            time.sleep(retry_delay)
            continue

        if resp.status_code == 429:
            if attempt == MAX_ATTEMPTS - 1:
                errors.append(f"{label}: HTTP 429 after {MAX_ATTEMPTS} attempts")
                return False
            time.sleep(retry_delay * (attempt + 1))
            continue
        if resp.status_code not in (200, 201):
            errors.append(f"{label}: HTTP {resp.status_code}: {resp.text[:200]}")
            return False
        return True
    return False


def inject_to_api(
    result: GenerationResult,
    base_url: str,
    api_key: str,
    batch_size: int = 20,
    *,
    retry_delay: float = 1.0,
    transport: httpx.BaseTransport | None = None,
) -> dict:
    """Send a generated user and its sessions to the receiving API.

    Returns summary: {"profile_id": str, "sessions": N, "batches": N, "errors": [...]}
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = to_payload(result)
    profile_id = result.profile.id
    sessions = payload["timeline"]["sessions"]
    errors: list[str] = []
    batches_sent = 0

    with httpx.Client(base_url=base_url, timeout=30.0, transport=transport) as client:
        user_body = {
            "profile": payload["profile"],
            "measurements": payload["timeline"]["measurements"],
            "achievements": payload["timeline"]["achievements"],
            "stats": payload["stats"],
        }
        if _post(client, "/v1/demo-users", user_body, headers, "Profile", errors, retry_delay):
            for i in range(0, len(sessions), batch_size):
                _post(
                    client,
                    f"/v1/demo-users/{profile_id}/sessions/batch",
                    {"sessions": sessions[i : i + batch_size]},
                    headers,
                    f"Batch {batches_sent}",
                    errors,
                    retry_delay,
                )
                batches_sent += 1
                # Small delay between batches to avoid rate limits
                time.sleep(retry_delay / 10)

    return {
        "profile_id": profile_id,
        "sessions": len(sessions),
        "batches": batches_sent,
        "errors": errors,
    }
