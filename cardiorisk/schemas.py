# cardiorisk/schemas.py
from datetime import datetime
from enum import Enum
from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Level(str, Enum):
    NORMAL = "normal"
    ABOVE_NORMAL = "aboveNormal"
    WELL_ABOVE_NORMAL = "wellAboveNormal"


class RiskClass(str, Enum):
    LOW = "low"
    HIGH = "high"


LEVEL_LABELS = {
    "Normal": Level.NORMAL,
    "Above normal": Level.ABOVE_NORMAL,
    "Well above normal": Level.WELL_ABOVE_NORMAL,
}

# form display label -> canonical value
CHOICE_LABELS: Dict[str, Dict[str, object]] = {
    "gender": {"Male": Gender.MALE, "Female": Gender.FEMALE},
    "cholesterol": LEVEL_LABELS,
    "glucose": LEVEL_LABELS,
    "smoker": {"Non-smoker": False, "Smoker": True},
    "alcohol": {"No": False, "Yes": True},
    "physically_active": {"Inactive": False, "Active": True},
}

# form defaults; numeric fields start unset
FORM_DEFAULTS = {
    "age": None,
    "gender": Gender.MALE,
    "height": None,
    "weight": None,
    "systolic_bp": None,
    "diastolic_bp": None,
    "cholesterol": Level.NORMAL,
    "glucose": Level.NORMAL,
    "smoker": False,
    "alcohol": False,
    "physically_active": True,
}


class AssessmentInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int = Field(..., ge=1, le=50000, strict=True)            # days
    gender: Gender
    height: int = Field(..., ge=50, le=250, strict=True)          # cm
    weight: int = Field(..., ge=10, le=300, strict=True)          # kg
    systolic_bp: int = Field(..., ge=70, le=250, strict=True)     # mmHg
    diastolic_bp: int = Field(..., ge=40, le=150, strict=True)    # mmHg
    cholesterol: Level
    glucose: Level
    smoker: bool = Field(..., strict=True)
    alcohol: bool = Field(..., strict=True)
    physically_active: bool = Field(..., strict=True)

    @field_validator(*CHOICE_LABELS, mode="before")
    @classmethod
    def _map_display_label(cls, value, info):
        if isinstance(value, str):
            return CHOICE_LABELS[info.field_name].get(value, value)
        return value


class PredictionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_class: RiskClass
    confidence: float = Field(..., ge=0, le=1)


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    input: AssessmentInput
    outcome: PredictionOutcome


class FieldError(BaseModel):
    field: str
    message: str


# --- Remote predictor contract ---
GENDER_CODES = {Gender.MALE: 1, Gender.FEMALE: 2}
LEVEL_CODES = {Level.NORMAL: 1, Level.ABOVE_NORMAL: 2, Level.WELL_ABOVE_NORMAL: 3}


class PredictRequest(BaseModel):
    age: int
    gender: int
    height: int
    weight: int
    ap_hi: int
    ap_lo: int
    cholesterol: int
    gluc: int
    smoke: int
    alco: int
    active: int

    @classmethod
    def from_assessment(cls, assessment: AssessmentInput) -> "PredictRequest":
        return cls(
            age=assessment.age,
            gender=GENDER_CODES[assessment.gender],
            height=assessment.height,
            weight=assessment.weight,
            ap_hi=assessment.systolic_bp,
            ap_lo=assessment.diastolic_bp,
            cholesterol=LEVEL_CODES[assessment.cholesterol],
            gluc=LEVEL_CODES[assessment.glucose],
            smoke=int(assessment.smoker),
            alco=int(assessment.alcohol),
            active=int(assessment.physically_active),
        )


class PredictResponse(BaseModel):
    prediction: Literal[0, 1]
    probability: float = Field(..., ge=0, le=1, strict=True)

    @field_validator("prediction", mode="before")
    @classmethod
    def _exact_int(cls, value):
        # true and 1.0 would otherwise match the literal
        if type(value) is not int:
            raise ValueError("prediction must be the integer 0 or 1")
        return value

    def to_outcome(self) -> PredictionOutcome:
        risk = RiskClass.HIGH if self.prediction == 1 else RiskClass.LOW
        return PredictionOutcome(risk_class=risk, confidence=self.probability)
