from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    LOW = "Faible"
    MODERATE = "Modérée"
    HIGH = "Élevée"
    TO_REVIEW = "À évaluer"
    INFORMATIVE = "Informatif"


class ClassificationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    score: float = Field(ge=0.0, le=1.0)


class Coordinates(BaseModel):
    # Percentages of the image width/height
    x: int
    y: int
    width: int
    height: int


class Finding(BaseModel):
    id: int
    type: str
    location: str
    severity: Severity
    confidence: int = Field(ge=0, le=100)
    coordinates: Coordinates


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    confidence: int
    findings: List[Finding]
    recommendations: List[str]
    model_used: Optional[str] = Field(default=None, alias="modelUsed")
    is_real_ai: bool = Field(default=False, alias="isRealAI")
    is_demo: bool = Field(default=False, alias="isDemo")
    error: Optional[str] = None


class ReportRequest(BaseModel):
    result: AnalysisResult
    filename: Optional[str] = None
