# cardiorisk/validation.py
from typing import Dict, List, Mapping

from pydantic import ValidationError

from .schemas import AssessmentInput, FieldError

FIELD_LABELS = {
    "age": "Age",
    "height": "Height",
    "weight": "Weight",
    "systolic_bp": "Systolic pressure",
    "diastolic_bp": "Diastolic pressure",
}

# (below minimum, above maximum)
RANGE_MESSAGES = {
    "age": ("Age must be at least 1 day", "Age seems unrealistic"),
    "height": ("Height must be at least 50 cm", "Height must be at most 250 cm"),
    "weight": ("Weight must be at least 10 kg", "Weight must be at most 300 kg"),
    "systolic_bp": ("Systolic pressure must be at least 70", "Systolic pressure seems too high"),
    "diastolic_bp": ("Diastolic pressure must be at least 40", "Diastolic pressure seems too high"),
}

CHOICE_MESSAGES = {
    "gender": "Please select gender",
    "cholesterol": "Please select cholesterol level",
    "glucose": "Please select glucose level",
    "smoker": "Please select smoking status",
    "alcohol": "Please select alcohol consumption",
    "physically_active": "Please select physical activity level",
}


class InvalidAssessment(ValueError):
    """Raised when a form submission violates one or more field constraints."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))

    def by_field(self) -> Dict[str, str]:
        return {e.field: e.message for e in self.errors}


def _message(field: str, error_type: str, value=None) -> str:
    if field in CHOICE_MESSAGES:
        return CHOICE_MESSAGES[field]
    label = FIELD_LABELS.get(field, field)
    if error_type == "greater_than_equal":
        return RANGE_MESSAGES[field][0]
    if error_type == "less_than_equal":
        return RANGE_MESSAGES[field][1]
    if error_type == "missing" or value is None:
        return f"{label} is required"
    return f"{label} must be a whole number"


def to_field_errors(exc: ValidationError) -> List[FieldError]:
    errors: List[FieldError] = []
    seen = set()
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        if field in seen:
            continue
        seen.add(field)
        errors.append(FieldError(field=field, message=_message(field, err["type"], err.get("input"))))
    return errors


def validate_assessment(values: Mapping) -> AssessmentInput:
    """Validate raw form values as a whole.

    Every violated field is reported at once through ``InvalidAssessment``;
    nothing partial is ever returned.
    """
    try:
        return AssessmentInput.model_validate(dict(values))
    except ValidationError as e:
        raise InvalidAssessment(to_field_errors(e)) from e
