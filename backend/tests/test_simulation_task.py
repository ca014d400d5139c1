"""Tests for the Celery signal map task body and job helpers."""

import pytest

from wifisim.core.config import settings
from wifisim.tasks import simulation_task
from wifisim.tasks.simulation_task import compute_signal_map_task, get_job_state


def test_task_returns_summary(survey_payload):
    summary = compute_signal_map_task({"survey": survey_payload, "resolution": 20})

    assert (summary["cols"], summary["rows"], summary["resolution"]) == (21, 11, 20)
    assert set(summary["coverage"]) == {"ghz24", "ghz5", "ghz6", "best"}
    assert summary["coverage"]["ghz6"]["coverage_breakdown"]["dead_zone"]["percentage"] == pytest.approx(100.0)
    assert summary["heatmap_path"] is None


def test_task_renders_heatmap(survey_payload, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "HEATMAP_PATH", str(tmp_path))

    summary = compute_signal_map_task(
        {"survey": survey_payload, "resolution": 20, "band": "ghz5", "render_heatmap": True}
    )

    assert set(summary["coverage"]) == {"ghz5"}
    assert summary["heatmap_path"] == str(tmp_path / "signal_map.png")
    assert (tmp_path / "signal_map.png").exists()


def test_task_rejects_survey_without_floor_plan(survey_payload):
    survey_payload.pop("floor_plan")
    with pytest.raises(ValueError):
        compute_signal_map_task({"survey": survey_payload})


class FakeResult:
    def __init__(self, status, result=None):
        self.status = status
        self.result = result

    def successful(self):
        return self.status == "SUCCESS"

    def failed(self):
        return self.status == "FAILURE"


@pytest.mark.parametrize("result, expected", [
    (FakeResult("PENDING"), {"task_id": "t1", "status": "pending"}),
    (FakeResult("SUCCESS", {"cols": 1}), {"task_id": "t1", "status": "success", "result": {"cols": 1}}),
    (FakeResult("FAILURE", ValueError("bad")), {"task_id": "t1", "status": "failure", "error": "bad"}),
])
def test_get_job_state(monkeypatch, result, expected):
    monkeypatch.setattr(simulation_task.celery_app, "AsyncResult", lambda task_id: result)

    assert get_job_state("t1") == expected
