"""Stage names and the trace events the pipeline records on each report."""

from __future__ import annotations

from enum import Enum
from typing import Any


class AnalysisStage(str, Enum):
    CREATED = "created"
    TEXT_ANALYZED = "text_analyzed"
    LINKS_ANALYZED = "links_analyzed"
    SENDER_ANALYZED = "sender_analyzed"
    CLASSIFIER_APPLIED = "classifier_applied"
    RECOMMENDATIONS_ADDED = "recommendations_added"


class StageStatus(str, Enum):
    DONE = "done"
    # Stage had nothing to inspect, e.g. no URLs in the body.
    SKIPPED = "skipped"


def stage_event(
    stage: AnalysisStage,
    status: StageStatus,
    summary: str,
    findings: dict[str, Any] | None = None,
) -> dict[str, Any]:
    event: dict[str, Any] = {
        "stage": AnalysisStage(stage).value,
        "status": StageStatus(status).value,
        "message": summary,
    }
    if findings:
        event["data"] = findings
    return event
