"""Fixed-order analysis pipeline producing a ``ThreatReport``."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from email_threat_scorer.config.settings import AnalysisThresholds, AppConfig
from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.domain.report import ThreatCategory, ThreatReport
from email_threat_scorer.orchestrator.recommendations import derive_recommendations
from email_threat_scorer.orchestrator.tracing import AnalysisStage, StageStatus, stage_event
from email_threat_scorer.tools.classifier.heuristic import HeuristicClassifier, NoiseSource
from email_threat_scorer.tools.intel.link_intel import LinkSafetyDetector
from email_threat_scorer.tools.intel.sender_intel import SenderIdentityDetector
from email_threat_scorer.tools.text.content import TextContentDetector

logger = logging.getLogger(__name__)


@dataclass
class StageFindings:
    stage: AnalysisStage
    threats: list[tuple[ThreatCategory, float]] = field(default_factory=list)
    suspicious_links: list[str] = field(default_factory=list)
    evidence: list[str] = field(default_factory=list)
    skipped: bool = False


class AnalysisOrchestrator:
    """Runs every detector over one email and aggregates a fresh report.

    Detectors hand back their findings as values; ``_apply`` is the only place
    that mutates the report, always in stage order.
    """

    def __init__(
        self,
        *,
        text_detector: TextContentDetector | None = None,
        link_detector: LinkSafetyDetector | None = None,
        sender_detector: SenderIdentityDetector | None = None,
        classifier: HeuristicClassifier | None = None,
        thresholds: AnalysisThresholds | None = None,
    ) -> None:
        self.text_detector = text_detector or TextContentDetector()
        self.link_detector = link_detector or LinkSafetyDetector()
        self.sender_detector = sender_detector or SenderIdentityDetector()
        self.classifier = classifier or HeuristicClassifier()
        self.thresholds = thresholds or AnalysisThresholds()

    @classmethod
    def from_config(cls, config: AppConfig, rng: NoiseSource | None = None) -> AnalysisOrchestrator:
        return cls(
            text_detector=TextContentDetector(
                extra_phishing_keywords=config.phishing_keywords,
                extra_spam_keywords=config.spam_keywords,
            ),
            link_detector=LinkSafetyDetector(config.malicious_domains),
            sender_detector=SenderIdentityDetector(
                trusted_domains=config.trusted_domains,
                spam_domains=config.spam_domains,
            ),
            classifier=HeuristicClassifier(
                rng=rng,
                seed=config.classifier_seed,
                model_path=config.classifier_model_path,
            ),
            thresholds=config.thresholds,
        )

    def analyze(self, email: Email | None) -> ThreatReport:
        email = email if email is not None else Email()
        report = ThreatReport(verdict_threshold=self.thresholds.malicious_verdict_threshold)
        report.trace.append(stage_event(AnalysisStage.CREATED, StageStatus.DONE, "report created"))

        for findings in (
            self._text_stage(email),
            self._link_stage(email),
            self._sender_stage(email),
            self._classifier_stage(email),
        ):
            self._apply(report, findings)

        for recommendation in derive_recommendations(report):
            report.add_recommendation(recommendation)
        report.trace.append(
            stage_event(
                AnalysisStage.RECOMMENDATIONS_ADDED,
                StageStatus.DONE,
                f"{len(report.recommendations)} recommendation(s)",
                {"is_malicious": report.is_malicious, "overall_score": round(report.overall_score, 2)},
            )
        )
        logger.info(
            "analysis complete sender=%s score=%.2f malicious=%s categories=%s",
            email.sender,
            report.overall_score,
            report.is_malicious,
            [category.value for category in report.triggered_categories()],
        )
        return report

    def _text_stage(self, email: Email) -> StageFindings:
        results = self.text_detector.analyze(email)
        findings = StageFindings(stage=AnalysisStage.TEXT_ANALYZED, evidence=results.evidence())
        for category, result in (
            (ThreatCategory.PHISHING, results.phishing),
            (ThreatCategory.SPAM, results.spam),
            (ThreatCategory.SOCIAL_ENGINEERING, results.social_engineering),
        ):
            if result.score > 0:
                findings.threats.append((category, result.score))
        return findings

    def _link_stage(self, email: Email) -> StageFindings:
        findings = StageFindings(stage=AnalysisStage.LINKS_ANALYZED)
        if not email.extracted_urls:
            findings.skipped = True
            return findings
        flagged: list[float] = []
        for url in email.extracted_urls:
            assessment = self.link_detector.inspect(url)
            if assessment.score > self.thresholds.link_flag_threshold:
                findings.suspicious_links.append(url)
                flagged.append(assessment.score)
        if flagged:
            findings.threats.append((ThreatCategory.SUSPICIOUS_LINK, max(flagged)))
        return findings

    def _sender_stage(self, email: Email) -> StageFindings:
        findings = StageFindings(stage=AnalysisStage.SENDER_ANALYZED)
        score = self.sender_detector.detect_spoofing(email)
        if score > 0:
            findings.threats.append((ThreatCategory.SENDER_SPOOFING, score))
        return findings

    def _classifier_stage(self, email: Email) -> StageFindings:
        findings = StageFindings(stage=AnalysisStage.CLASSIFIER_APPLIED)
        malicious, _ = self.classifier.classify(email)
        if malicious > self.thresholds.classifier_catch_all_threshold:
            findings.threats.append((ThreatCategory.OTHER, malicious * 100.0))
        return findings

    def _apply(self, report: ThreatReport, findings: StageFindings) -> None:
        for category, confidence in findings.threats:
            report.add_threat(category, confidence)
        for url in findings.suspicious_links:
            report.add_suspicious_link(url)
        for keyword in findings.evidence:
            report.add_suspicious_keyword(keyword)

        data = {category.value: round(confidence, 2) for category, confidence in findings.threats}
        if findings.suspicious_links:
            data["suspicious_links"] = list(findings.suspicious_links)
        status = StageStatus.SKIPPED if findings.skipped else StageStatus.DONE
        report.trace.append(
            stage_event(findings.stage, status, f"{len(findings.threats)} threat(s)", data or None)
        )
        logger.debug("stage %s %s threats=%s", findings.stage.value, status.value, data)
