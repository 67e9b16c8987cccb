import pytest

from dental_xray.normalizer import (
    MODEL_NAME,
    coordinates_for,
    demo_result,
    map_label,
    normalize,
    round_half_up,
    severity_for,
)
from dental_xray.schemas import Coordinates, Severity


def test_two_item_example():
    result = normalize([{"label": "tooth", "score": 0.92}, {"label": "bone", "score": 0.55}])

    assert result.confidence == 74
    assert len(result.findings) == 2

    first, second = result.findings
    assert first.id == 1
    assert first.type == "Élément dentaire"
    assert first.location == "Zone détectée par IA (tooth)"
    assert first.confidence == 92
    assert first.severity is Severity.HIGH
    assert first.coordinates == Coordinates(x=30, y=25, width=8, height=6)

    assert second.id == 2
    assert second.type == "Structure osseuse"
    assert second.confidence == 55
    assert second.severity is Severity.LOW
    assert second.coordinates == Coordinates(x=45, y=45, width=9, height=7)

    assert result.is_real_ai is True
    assert result.is_demo is False
    assert result.model_used == MODEL_NAME
    assert len(result.recommendations) == 3


def test_only_first_three_items_are_kept_in_given_order():
    payload = [
        {"label": "x-ray", "score": 0.1},
        {"label": "Medical Equipment", "score": 0.7},
        {"label": "sunglasses", "score": 0.9},
        {"label": "tooth", "score": 0.99},
    ]

    result = normalize(payload)

    assert [f.type for f in result.findings] == [
        "Image radiologique",
        "Structure dentaire",
        "Zone d'intérêt",
    ]
    assert [f.confidence for f in result.findings] == [10, 70, 90]
    assert result.confidence == 57
    assert result.findings[2].coordinates == Coordinates(x=60, y=65, width=10, height=8)


@pytest.mark.parametrize("payload", [[], None, {"error": "Model loading"}, "oops", [{"label": "tooth"}], [42]])
def test_unusable_payload_gives_placeholder(payload):
    result = normalize(payload)

    assert result.confidence == 70
    assert len(result.findings) == 1
    finding = result.findings[0]
    assert finding.type == "Analyse complétée"
    assert finding.location == "Image traitée par IA"
    assert finding.severity is Severity.INFORMATIVE
    assert finding.confidence == 70
    assert finding.coordinates == Coordinates(x=45, y=40, width=10, height=8)
    assert result.is_real_ai is True


@pytest.mark.parametrize(
    "confidence, expected",
    [(100, Severity.HIGH), (81, Severity.HIGH), (80, Severity.MODERATE), (61, Severity.MODERATE), (60, Severity.LOW), (0, Severity.LOW)],
)
def test_severity_thresholds(confidence, expected):
    assert severity_for(confidence) is expected


def test_half_scores_round_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(0.5) == 1
    result = normalize([{"label": "tooth", "score": 0.625}, {"label": "bone", "score": 0.5}])
    assert [f.confidence for f in result.findings] == [63, 50]
    # mean of 63 and 50 is 56.5
    assert result.confidence == 57


def test_label_lookup_is_case_insensitive():
    assert map_label("TOOTH") == "Élément dentaire"
    assert map_label("X-Ray") == "Image radiologique"
    assert map_label("golden retriever") == "Zone d'intérêt"


def test_coordinates_follow_position():
    assert coordinates_for(0) == Coordinates(x=30, y=25, width=8, height=6)
    assert coordinates_for(2) == Coordinates(x=60, y=65, width=10, height=8)


def test_demo_result():
    result = demo_result()

    assert result.is_demo is True
    assert result.is_real_ai is False
    assert result.confidence == 75
    assert result.error == "Mode démo - API non disponible"
    assert len(result.findings) == 1
    assert result.findings[0].severity is Severity.TO_REVIEW
    assert result.findings[0].confidence == 80
