from typing import Optional


class CareerCanvasError(Exception):
    """Base class for every domain error raised by the backend."""


class IncompleteInputError(CareerCanvasError):
    """Fewer than the required number of valid subject/percentage pairs."""

    def __init__(self, valid_count: int, required: int = 7):
        self.valid_count = valid_count
        self.required = required
        super().__init__(
            f"Please fill in all {required} subjects with valid percentages "
            f"({valid_count} valid)"
        )


class SubjectSlotError(CareerCanvasError, ValueError):
    """The subject slots do not follow the fixed matric layout."""


class UnknownInstitutionError(CareerCanvasError, LookupError):
    def __init__(self, institution: str, message: Optional[str] = None):
        self.institution = institution
        super().__init__(message or f"No score for institution: {institution}")


class CatalogError(CareerCanvasError, ValueError):
    """Invalid course catalog or policy reference data."""


class IncompleteQuizError(CareerCanvasError):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Unanswered questions: {', '.join(self.missing)}")


class InvalidAnswerError(CareerCanvasError, ValueError):
    pass
