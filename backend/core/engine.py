import logging
from typing import Iterable, List, Optional, Sequence

from backend.core.errors import UnknownInstitutionError
from backend.core.models import (
    CourseRequirement,
    EligibilityResult,
    InstitutionScore,
    MatchResult,
    MatchStatus,
    Student,
)
from backend.core.personality import group_for
from backend.core.repositories import CourseRepository, StaticCourseRepository
from backend.core.rule_factory import RuleFactory

logger = logging.getLogger(__name__)


class EligibilityEngine:
    """Stateless: every call walks the whole catalog again."""

    def __init__(self, repo: CourseRepository, factory: Optional[RuleFactory] = None):
        self.repo = repo
        self.factory = factory or RuleFactory()

    @staticmethod
    def is_ready(student: Student) -> bool:
        has_subjects = any(s and s.strip() for s in student.subjects or [])
        return bool(student.scores) and has_subjects and bool(student.personality)

    def _evaluate(self, student: Student, unknown: List[str]) -> List[EligibilityResult]:
        results: List[EligibilityResult] = []
        for course in self.repo.list_courses():
            rule = self.factory.for_course(course)
            try:
                rr = rule.evaluate(student)
            except UnknownInstitutionError as e:
                if e.institution not in unknown:
                    unknown.append(e.institution)
                    logger.warning(
                        "Catalog inconsistency: no APS for institution %r (course %r and others)",
                        e.institution, course.course_name,
                    )
                results.append(EligibilityResult(course=course, passed=False, explanations=[str(e)]))
                continue
            results.append(EligibilityResult(
                course=course,
                passed=rr.passed,
                explanations=rr.explanation.split(" | "),
            ))
        return results

    def evaluate_student(self, student: Student) -> List[EligibilityResult]:
        return self._evaluate(student, [])

    def match(self, student: Student) -> MatchResult:
        if not self.is_ready(student):
            return MatchResult(status=MatchStatus.NOT_READY)

        unknown: List[str] = []
        matched = tuple(r.course for r in self._evaluate(student, unknown) if r.passed)
        status = MatchStatus.MATCHED if matched else MatchStatus.NO_MATCHES
        return MatchResult(status=status, courses=matched, unknown_institutions=tuple(unknown))

    def alternatives(self, personality: Optional[str], limit: int = 4) -> List[CourseRequirement]:
        """Courses for the student's personality group, ignoring APS and subjects."""
        group = group_for(personality)
        if group is None:
            return []
        return [c for c in self.repo.list_courses() if group in c.personality_match][:limit]


def match_courses(
    scores: Optional[InstitutionScore],
    subjects: Sequence[str],
    personality: Optional[str],
    catalog: Iterable[CourseRequirement],
) -> MatchResult:
    engine = EligibilityEngine(StaticCourseRepository(catalog))
    return engine.match(Student(scores=dict(scores or {}), subjects=list(subjects or []), personality=personality))
