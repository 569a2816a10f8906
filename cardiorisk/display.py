# cardiorisk/display.py
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from .schemas import AssessmentInput, Gender, HistoryEntry, PredictionOutcome, RiskClass

INTERPRETATION = {
    RiskClass.HIGH: (
        "**High cardiovascular risk detected.** We recommend consulting with a healthcare "
        "professional for further evaluation and discussion of preventive measures."
    ),
    RiskClass.LOW: (
        "**Low cardiovascular risk indicated.** Continue maintaining healthy lifestyle habits "
        "and regular check-ups with your healthcare provider."
    ),
}

DISCLAIMER = (
    "* This prediction is for informational purposes only and should not replace professional "
    "medical advice. Always consult with qualified healthcare professionals for medical decisions."
)

EMPTY_HISTORY = (
    "No prediction history yet. Complete a risk assessment to see your results here."
)


def percent(confidence: float) -> int:
    """Confidence as a whole percent, rounding halves up."""
    return int((Decimal(str(confidence)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_confidence(confidence: float) -> str:
    return f"{percent(confidence)}%"


def risk_label(outcome: PredictionOutcome) -> str:
    return "High" if outcome.risk_class == RiskClass.HIGH else "Low"


def describe_outcome(outcome: PredictionOutcome) -> str:
    return f"{risk_label(outcome)} Risk, {format_confidence(outcome.confidence)} confidence"


def risk_tone(outcome: PredictionOutcome) -> str:
    confident = percent(outcome.confidence) > 70
    if outcome.risk_class == RiskClass.HIGH:
        return "danger" if confident else "warning"
    return "success" if confident else "info"


def risk_badge(outcome: PredictionOutcome) -> str:
    return f"{risk_label(outcome)} Risk ({format_confidence(outcome.confidence)})"


# --- History panel ---

def format_timestamp(ts: datetime, tz: tzinfo = None) -> str:
    local = ts.astimezone(tz)
    return f"{local:%b} {local.day}, {local:%I:%M %p}"


def age_years(assessment: AssessmentInput) -> int:
    return int((Decimal(assessment.age) / 365).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def gender_label(assessment: AssessmentInput) -> str:
    return "Male" if assessment.gender == Gender.MALE else "Female"


def blood_pressure(assessment: AssessmentInput) -> str:
    return f"{assessment.systolic_bp}/{assessment.diastolic_bp}"


def bmi(assessment: AssessmentInput) -> float:
    h_m = assessment.height / 100.0
    return assessment.weight / (h_m ** 2)


def history_count_label(count: int) -> str:
    return f"{count} prediction{'' if count == 1 else 's'}"


def summarize_entry(entry: HistoryEntry, tz: tzinfo = None) -> dict:
    a = entry.input
    return {
        "when": format_timestamp(entry.created_at, tz),
        "badge": risk_badge(entry.outcome),
        "high_risk": entry.outcome.risk_class == RiskClass.HIGH,
        "age": f"Age: {age_years(a)} years",
        "gender": f"Gender: {gender_label(a)}",
        "bp": f"BP: {blood_pressure(a)}",
        "bmi": f"BMI: {bmi(a):.1f}",
    }
