"""Runner wrappers for the CLI."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging

from email_threat_scorer.app.render import render, render_text
from email_threat_scorer.config.settings import AppConfig
from email_threat_scorer.core.errors import EmailParseError
from email_threat_scorer.domain.email.models import Email
from email_threat_scorer.domain.email.parse import email_from_fields, parse_eml_file, parse_input_payload
from email_threat_scorer.orchestrator.pipeline import AnalysisOrchestrator
from email_threat_scorer.tools.classifier.heuristic import NoiseSource

logger = logging.getLogger(__name__)

MENU = """
----- MAIN MENU -----
1. Analyze email by manual input
2. Analyze email from file
3. Help
4. Exit"""

HELP_TEXT = """
----- HELP INFORMATION -----
This tool scores emails for potential threats.

Analysis components:
1. Text analysis - suspicious keywords and patterns
2. Link analysis - risky URLs in the body
3. Sender analysis - spoofed or inconsistent sender information
4. Heuristic classifier - coarse catch-all score

How to use:
- Option 1 asks for sender, subject and body
- Option 2 reads an .eml file
- Each analysis prints a threat report with recommendations

Configuration:
- Run with --init-config PATH to write an editable YAML config
- Keyword and domain lists can also live in plain-text files under lists_dir"""

BODY_TERMINATOR = "END"


@dataclass
class InMemorySession:
    history: list[dict[str, object]] = field(default_factory=list)

    def add(self, item: dict[str, object]) -> None:
        self.history.append(item)


def build_orchestrator(config: AppConfig, rng: NoiseSource | None = None) -> AnalysisOrchestrator:
    return AnalysisOrchestrator.from_config(config, rng=rng)


def analyze_email(orchestrator: AnalysisOrchestrator, email: Email, output_format: str = "json") -> str:
    return render(orchestrator.analyze(email), email, output_format)


def run_once(
    config: AppConfig,
    *,
    text: str | None = None,
    path: str | None = None,
    output_format: str = "json",
    rng: NoiseSource | None = None,
) -> str:
    """Analyze one input and return the rendered report.

    Raises ``EmailParseError`` before any scoring when the input cannot be read.
    """

    email = parse_eml_file(path) if path else parse_input_payload(text or "")
    return analyze_email(build_orchestrator(config, rng), email, output_format)


def _read_choice(read: Callable[[str], str]) -> int:
    prompt = "\nEnter your choice (1-4): "
    while True:
        raw = read(prompt).strip()
        if raw.isdigit() and 1 <= int(raw) <= 4:
            return int(raw)
        prompt = "Invalid choice. Enter a number between 1 and 4: "


def _read_manual_email(read: Callable[[str], str]) -> Email:
    sender = read("Enter sender email: ").strip()
    subject = read("Enter email subject: ").strip()
    lines: list[str] = []
    prompt = f"Enter email body (type '{BODY_TERMINATOR}' on a new line to finish):\n"
    while True:
        line = read(prompt)
        prompt = ""
        if line == BODY_TERMINATOR:
            break
        lines.append(line)
    return email_from_fields(sender, subject, "\n".join(lines).strip())


def run_chat(
    config: AppConfig,
    *,
    rng: NoiseSource | None = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> InMemorySession:
    orchestrator = build_orchestrator(config, rng)
    session = InMemorySession()
    write("email threat scorer started, choose an option from the menu")
    while True:
        write(MENU)
        try:
            choice = _read_choice(read)
            if choice == 4:
                write("Goodbye!")
                break
            if choice == 3:
                write(HELP_TEXT)
                continue
            if choice == 1:
                email = _read_manual_email(read)
            else:
                path = read("Enter the path to the email file: ").strip()
                try:
                    email = parse_eml_file(path)
                except EmailParseError as exc:
                    logger.warning("could not load %s: %s", path, exc)
                    write(f"Error: {exc}")
                    continue
        except EOFError:
            break

        write(f"\nAnalyzing email... URLs found: {len(email.extracted_urls)}")
        report = orchestrator.analyze(email)
        session.add(report.to_payload())
        write(render_text(report, email))
    return session
