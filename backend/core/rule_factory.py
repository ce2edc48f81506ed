from backend.core.models import CourseRequirement
from backend.core.rules import (
    AndRule,
    PersonalityRule,
    ScoreThresholdRule,
    SubjectCoverageRule,
)


class RuleFactory:
    """
    Build the eligibility rule for a catalog course.
    All three predicates must hold: score threshold at the course's institution,
    subject coverage, personality membership.
    """

    def for_course(self, course: CourseRequirement) -> AndRule:
        return AndRule(
            ScoreThresholdRule(institution=course.institution, required_score=course.required_score),
            SubjectCoverageRule(course.required_subjects),
            PersonalityRule(course.personality_match),
        )
