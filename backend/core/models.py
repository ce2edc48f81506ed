from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from backend.core.errors import CatalogError

LIFE_ORIENTATION = "Life Orientation"
SUBJECT_SLOTS = 7
LIFE_ORIENTATION_SLOT = 1

# institution id -> APS
InstitutionScore = Dict[str, int]


@dataclass(frozen=True)
class SubjectResult:
    name: str
    percentage: int


@dataclass
class MatricRecord:
    subjects: List[SubjectResult] = field(default_factory=list)
    life_orientation_slot: int = LIFE_ORIENTATION_SLOT

    def find(self, name: str) -> Optional[SubjectResult]:
        for s in self.subjects:
            if s.name == name:
                return s
        return None

    @property
    def life_orientation(self) -> SubjectResult:
        return self.subjects[self.life_orientation_slot]

    def others(self) -> List[SubjectResult]:
        """All subjects except life orientation, in input order."""
        return [s for i, s in enumerate(self.subjects) if i != self.life_orientation_slot]

    def names(self) -> List[str]:
        return [s.name for s in self.subjects]


@dataclass
class Student:
    scores: InstitutionScore
    subjects: List[str]
    personality: Optional[str]


@dataclass
class RuleResult:
    passed: bool
    explanation: str


@dataclass(frozen=True)
class CourseRequirement:
    institution: str
    course_name: str
    required_score: int
    required_subjects: Tuple[str, ...]
    personality_match: FrozenSet[str]
    duration: str = ""
    intake: str = ""
    description: str = ""
    student_life: str = ""

    def __post_init__(self):
        if not self.required_subjects:
            raise CatalogError(f"{self.course_name} ({self.institution}): no required subjects")
        if not self.personality_match:
            raise CatalogError(f"{self.course_name} ({self.institution}): no personality match")


@dataclass
class EligibilityResult:
    course: CourseRequirement
    passed: bool
    explanations: List[str]


class MatchStatus(str, Enum):
    NOT_READY = "not_ready"
    NO_MATCHES = "no_matches"
    MATCHED = "matched"


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    courses: Tuple[CourseRequirement, ...] = ()
    # catalog institutions with no entry in the supplied scores
    unknown_institutions: Tuple[str, ...] = ()

    @property
    def ready(self) -> bool:
        return self.status is not MatchStatus.NOT_READY
