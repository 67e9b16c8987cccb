"""Turn raw classifier output into a dentistry-labelled analysis result."""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any, List, Optional

from pydantic import ValidationError

from .schemas import AnalysisResult, ClassificationItem, Coordinates, Finding, Severity

logger = logging.getLogger(__name__)

MODEL_NAME = "google/vit-base-patch16-224"
MAX_FINDINGS = 3

DENTAL_LABELS = MappingProxyType(
    {
        "medical equipment": "Structure dentaire",
        "x-ray": "Image radiologique",
        "bone": "Structure osseuse",
        "tooth": "Élément dentaire",
    }
)
UNKNOWN_LABEL = "Zone d'intérêt"

RECOMMENDATIONS = (
    "Analyse réalisée avec modèle Hugging Face Vision Transformer",
    "Résultats adaptés au contexte dentaire par post-traitement",
    "Validation clinique recommandée pour diagnostic définitif",
)

PLACEHOLDER_CONFIDENCE = 70

DEMO_CONFIDENCE = 75
DEMO_ERROR = "Mode démo - API non disponible"
DEMO_RECOMMENDATIONS = (
    "Analyse basée sur modèle de vision généraliste",
    "Validation requise par praticien spécialisé",
    "Considérer imagerie complémentaire si nécessaire",
)


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores are rounded .5 upwards.
    return int(math.floor(value + 0.5))


def map_label(label: str) -> str:
    return DENTAL_LABELS.get(label.lower(), UNKNOWN_LABEL)


def severity_for(confidence: int) -> Severity:
    if confidence > 80:
        return Severity.HIGH
    if confidence > 60:
        return Severity.MODERATE
    return Severity.LOW


def coordinates_for(index: int) -> Coordinates:
    return Coordinates(x=30 + 15 * index, y=25 + 20 * index, width=8 + index, height=6 + index)


def parse_items(payload: Any) -> Optional[List[ClassificationItem]]:
    """Return the leading classification items, or None if the payload is unusable."""
    if not isinstance(payload, list) or not payload:
        return None
    try:
        return [ClassificationItem.model_validate(item) for item in payload[:MAX_FINDINGS]]
    except ValidationError as exc:
        logger.warning("Unrecognised classification payload: %s", exc)
        return None


def _placeholder_finding() -> Finding:
    return Finding(
        id=1,
        type="Analyse complétée",
        location="Image traitée par IA",
        severity=Severity.INFORMATIVE,
        confidence=PLACEHOLDER_CONFIDENCE,
        coordinates=Coordinates(x=45, y=40, width=10, height=8),
    )


def normalize(payload: Any) -> AnalysisResult:
    items = parse_items(payload)
    if items is None:
        findings = [_placeholder_finding()]
        confidence = PLACEHOLDER_CONFIDENCE
    else:
        findings = []
        for index, item in enumerate(items):
            item_confidence = round_half_up(item.score * 100)
            findings.append(
                Finding(
                    id=index + 1,
                    type=map_label(item.label),
                    location=f"Zone détectée par IA ({item.label})",
                    severity=severity_for(item_confidence),
                    confidence=item_confidence,
                    coordinates=coordinates_for(index),
                )
            )
        confidence = round_half_up(sum(f.confidence for f in findings) / len(findings))

    return AnalysisResult(
        confidence=confidence,
        findings=findings,
        recommendations=list(RECOMMENDATIONS),
        model_used=MODEL_NAME,
        is_real_ai=True,
    )


def demo_result() -> AnalysisResult:
    """Synthetic result shown when the classification service is unavailable."""
    return AnalysisResult(
        confidence=DEMO_CONFIDENCE,
        findings=[
            Finding(
                id=1,
                type="Anomalie détectée",
                location="Zone d'intérêt identifiée",
                severity=Severity.TO_REVIEW,
                confidence=80,
                coordinates=Coordinates(x=40, y=35, width=10, height=8),
            )
        ],
        recommendations=list(DEMO_RECOMMENDATIONS),
        is_demo=True,
        error=DEMO_ERROR,
    )


__all__ = [
    "DENTAL_LABELS",
    "MODEL_NAME",
    "coordinates_for",
    "demo_result",
    "map_label",
    "normalize",
    "parse_items",
    "round_half_up",
    "severity_for",
]
