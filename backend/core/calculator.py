import logging
import math
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from backend.config import settings
from backend.core.errors import CatalogError, IncompleteInputError, SubjectSlotError
from backend.core.models import (
    InstitutionScore,
    LIFE_ORIENTATION,
    LIFE_ORIENTATION_SLOT,
    MatricRecord,
    SUBJECT_SLOTS,
    SubjectResult,
)
from backend.institutions.loaders import load_policy, load_universities
from backend.institutions.seven_point.policy import SevenPointPolicy
from backend.institutions.wits.policy import WitsPolicy

logger = logging.getLogger(__name__)

SubjectEntry = Union[SubjectResult, Tuple[str, Any]]


class ScoringPolicy(Protocol):
    def points_for(self, subject: SubjectResult, life_orientation: bool = False) -> int: ...

    def compute_score_with_breakdown(self, record: MatricRecord) -> Tuple[int, List[str]]: ...


# scale name (universities.json) -> policy class
POLICY_CLASSES = {
    "seven_point": SevenPointPolicy,
    "weighted_ten_point": WitsPolicy,
}


def parse_percentage(value: Any) -> Optional[int]:
    """Whole-number percentage in [0, 100], truncated; None if unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(num) or num < 0 or num > 100:
        return None
    return int(num)


def _unpack(entry: SubjectEntry) -> Tuple[Any, Any]:
    if isinstance(entry, SubjectResult):
        return entry.name, entry.percentage
    try:
        name, percentage = entry
    except (TypeError, ValueError):
        # malformed slot counts as unfilled
        return None, None
    return name, percentage


def build_record(entries: Sequence[SubjectEntry]) -> MatricRecord:
    """
    Validate the seven matric slots:
      1) every slot needs a non-empty name and a usable percentage; fewer than 7 such
         slots -> IncompleteInputError (never a partial score)
      2) no more than 7 slots
      3) slot 2 is always Life Orientation
    """
    subjects: List[SubjectResult] = []
    for entry in entries:
        name, raw = _unpack(entry)
        name = (name or "").strip() if isinstance(name, str) else ""
        pct = parse_percentage(raw)
        if name and pct is not None:
            subjects.append(SubjectResult(name=name, percentage=pct))

    if len(subjects) < SUBJECT_SLOTS:
        raise IncompleteInputError(len(subjects), SUBJECT_SLOTS)
    if len(entries) > SUBJECT_SLOTS:
        raise SubjectSlotError(f"Expected exactly {SUBJECT_SLOTS} subjects, got {len(entries)}")

    lo = subjects[LIFE_ORIENTATION_SLOT]
    if lo.name != LIFE_ORIENTATION:
        raise SubjectSlotError(
            f"Subject {LIFE_ORIENTATION_SLOT + 1} must be {LIFE_ORIENTATION}, got {lo.name!r}"
        )
    return MatricRecord(subjects=subjects)


class ApsCalculator:
    def __init__(self, policies: Dict[str, ScoringPolicy]):
        if not policies:
            raise CatalogError("ApsCalculator needs at least one institution policy")
        self.policies = dict(policies)

    @property
    def institutions(self) -> List[str]:
        return list(self.policies)

    def compute_with_breakdown(
        self, entries: Sequence[SubjectEntry]
    ) -> Tuple[InstitutionScore, Dict[str, List[str]]]:
        try:
            record = build_record(entries)
        except IncompleteInputError as e:
            logger.info("APS not computed: %s", e)
            raise

        scores: InstitutionScore = {}
        breakdown: Dict[str, List[str]] = {}
        for inst, policy in self.policies.items():
            score, notes = policy.compute_score_with_breakdown(record)
            scores[inst] = int(score)
            breakdown[inst] = notes
        return scores, breakdown

    def compute_scores(self, entries: Sequence[SubjectEntry]) -> InstitutionScore:
        scores, _ = self.compute_with_breakdown(entries)
        return scores


def build_policy(scale: str, policy_cfg: Dict[str, Any]) -> ScoringPolicy:
    cls = POLICY_CLASSES.get((scale or "").lower())
    if cls is None:
        raise CatalogError(f"Unknown scoring scale: {scale!r}")
    return cls(policy_cfg)


def build_calculator(data_root: str) -> ApsCalculator:
    """Wire one policy per institution that declares a `scale` in universities.json."""
    policies: Dict[str, ScoringPolicy] = {}
    for uni in load_universities(data_root):
        scale = uni.get("scale")
        if not scale:
            continue
        inst = uni["id"]
        policies[inst] = build_policy(scale, load_policy(data_root, inst))
    logger.info("APS calculator ready for: %s", ", ".join(policies))
    return ApsCalculator(policies)


@lru_cache(maxsize=None)
def default_calculator() -> ApsCalculator:
    return build_calculator(settings.DATA_DIR)


def compute_scores(entries: Sequence[SubjectEntry], calculator: Optional[ApsCalculator] = None) -> InstitutionScore:
    return (calculator or default_calculator()).compute_scores(entries)
