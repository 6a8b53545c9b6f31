"""Analysis orchestration layer."""

from email_threat_scorer.orchestrator.pipeline import AnalysisOrchestrator, StageFindings
from email_threat_scorer.orchestrator.recommendations import derive_recommendations
from email_threat_scorer.orchestrator.tracing import AnalysisStage, StageStatus

__all__ = ["AnalysisOrchestrator", "AnalysisStage", "StageFindings", "StageStatus", "derive_recommendations"]
