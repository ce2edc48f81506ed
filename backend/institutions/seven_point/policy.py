# backend/institutions/seven_point/policy.py
from typing import Any, Dict, List, Optional, Tuple

from backend.core.ladder import Ladder
from backend.core.models import MatricRecord, SubjectResult

DEFAULT_LADDER = Ladder(
    [(80, 7), (70, 6), (60, 5), (50, 4), (40, 3), (30, 2)],
    floor=1,
)


class SevenPointPolicy:
    """
    7-point flat scale (UJ, UP):
    - Every subject uses the same ladder: 80%->7, 70%->6, 60%->5, 50%->4, 40%->3, 30%->2, else 1.
    - Life Orientation is excluded entirely (its mark never affects the APS).
    - APS = sum of the best `best_of` remaining subjects (6 by default, i.e. all of them).
    """

    def __init__(self, policy_cfg: Optional[Dict[str, Any]] = None):
        self.cfg = policy_cfg or {}
        self.ladder = Ladder.from_cfg(self.cfg.get("ladder"), DEFAULT_LADDER)
        self.best_of = int(self.cfg.get("best_of", 6))

    def points_for(self, subject: SubjectResult, life_orientation: bool = False) -> int:
        if life_orientation:
            return 0
        return self.ladder.points(subject.percentage)

    def compute_score_with_breakdown(self, record: MatricRecord) -> Tuple[int, List[str]]:
        notes: List[str] = []
        lo = record.life_orientation
        notes.append(f"SKIP {lo.name}: {lo.percentage}% (excluded)")

        scored = [(s, self.points_for(s)) for s in record.others()]
        # stable: equal points keep input order
        scored.sort(key=lambda x: x[1], reverse=True)

        total = 0
        for s, pts in scored[:self.best_of]:
            total += pts
            notes.append(f"ADD {s.name}: {s.percentage}% -> {pts}")
        for s, pts in scored[self.best_of:]:
            notes.append(f"DROP {s.name}: {s.percentage}% -> {pts}")

        notes.append(f"APS = {total}")
        return total, notes
