from __future__ import annotations

from datetime import date
from typing import Optional

from .schemas import AnalysisResult

REPORT_FILENAME = "rapport_analyse_dentaire.txt"
DEFAULT_SOURCE_NAME = "Image téléchargée"


def build_report(
    result: AnalysisResult,
    filename: Optional[str] = None,
    report_date: Optional[date] = None,
) -> str:
    """Render an analysis result as the plain-text report offered for download."""
    report_date = report_date or date.today()
    findings = "\n".join(
        f"- {finding.type}: {finding.location} "
        f"(Sévérité: {finding.severity.value}, Confiance: {finding.confidence}%)"
        for finding in result.findings
    )
    recommendations = "\n".join(f"- {rec}" for rec in result.recommendations)

    lines = [
        "RAPPORT D'ANALYSE RADIOLOGIQUE DENTAIRE",
        "=====================================",
        "",
        f"Fichier analysé: {filename or DEFAULT_SOURCE_NAME}",
        f"Date d'analyse: {report_date.strftime('%d/%m/%Y')}",
        f"Niveau de confiance global: {result.confidence}%",
        "",
        "ANOMALIES DÉTECTÉES:",
        findings,
        "",
        "RECOMMANDATIONS:",
        recommendations,
        "",
        "Note: Cette analyse est générée par IA et doit être validée par un praticien qualifié.",
    ]
    return "\n".join(lines) + "\n"


__all__ = ["REPORT_FILENAME", "build_report"]
