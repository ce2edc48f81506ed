from typing import Iterable, List, Protocol

from backend.core.errors import UnknownInstitutionError
from backend.core.models import RuleResult, Student


class EligibilityRule(Protocol):
    def evaluate(self, student: Student) -> RuleResult: ...


def subject_covers(student_subject: str, required: str) -> bool:
    """Case-insensitive containment in either direction."""
    s = student_subject.lower()
    r = required.lower()
    return s in r or r in s


class ScoreThresholdRule:
    def __init__(self, institution: str, required_score: int):
        self.institution = institution
        self.required_score = int(required_score)

    def evaluate(self, student: Student) -> RuleResult:
        score = student.scores.get(self.institution)
        if score is None:
            raise UnknownInstitutionError(self.institution)
        passed = score >= self.required_score
        return RuleResult(
            passed,
            f"APS({self.institution})={score} {'≥' if passed else '<'} required={self.required_score}",
        )


class SubjectCoverageRule:
    def __init__(self, required_subjects: Iterable[str]):
        self.required_subjects = list(required_subjects)

    def evaluate(self, student: Student) -> RuleResult:
        subjects = [s for s in student.subjects if s and s.strip()]
        missing: List[str] = []
        for req in self.required_subjects:
            if not any(subject_covers(s, req) for s in subjects):
                missing.append(req)
        if missing:
            return RuleResult(False, f"missing subjects: {', '.join(missing)}")
        return RuleResult(True, f"subjects OK ({', '.join(self.required_subjects)})")


class PersonalityRule:
    def __init__(self, personality_match: Iterable[str]):
        self.personality_match = frozenset(personality_match)

    def evaluate(self, student: Student) -> RuleResult:
        passed = student.personality in self.personality_match
        return RuleResult(
            passed,
            f"personality {student.personality} {'matches' if passed else 'does not match'}",
        )


class AndRule:
    def __init__(self, *rules):
        self.rules = list(rules)

    def evaluate(self, student: Student) -> RuleResult:
        exps = []
        for r in self.rules:
            rr = r.evaluate(student)
            exps.append(rr.explanation)
            if not rr.passed:
                return RuleResult(False, " | ".join(exps))
        return RuleResult(True, " | ".join(exps))
