# backend/institutions/wits/policy.py
from typing import Any, Dict, List, Optional, Tuple

from backend.core.ladder import Ladder
from backend.core.models import MatricRecord, SubjectResult

DEFAULT_LIFE_ORIENTATION_LADDER = Ladder([(90, 4), (80, 3), (70, 2), (60, 1)], floor=0)

# 50-59% drops straight to 4 on the boosted ladder
DEFAULT_BOOSTED_LADDER = Ladder(
    [(90, 10), (80, 9), (70, 8), (60, 7), (50, 4), (40, 3)],
    floor=0,
)

DEFAULT_STANDARD_LADDER = Ladder(
    [(90, 8), (80, 7), (70, 6), (60, 5), (50, 4), (40, 3)],
    floor=0,
)


class WitsPolicy:
    """
    Weighted 10-point scale (Wits):
    - Life Orientation is scored on its own reduced ladder out of 4:
        90%->4, 80%->3, 70%->2, 60%->1, else 0.
    - Mathematics and English are boosted, out of 10:
        90%->10, 80%->9, 70%->8, 60%->7, 50%->4, 40%->3, else 0.
      A subject is boosted when its name CONTAINS one of the boosted keywords
      ("Mathematics", "English"), so "English Home Language" and
      "Advanced Mathematics" both qualify.
    - Every other subject uses the 8-point ladder:
        90%->8, 80%->7, 70%->6, 60%->5, 50%->4, 40%->3, else 0.
    - APS = sum of the best `best_of` subjects (7 by default), Life Orientation included.
      Ties keep input order.
    """

    def __init__(self, policy_cfg: Optional[Dict[str, Any]] = None):
        self.cfg = policy_cfg or {}
        ladders = self.cfg.get("ladders", {})
        self.life_orientation_ladder = Ladder.from_cfg(
            ladders.get("life_orientation"), DEFAULT_LIFE_ORIENTATION_LADDER
        )
        self.boosted_ladder = Ladder.from_cfg(ladders.get("boosted"), DEFAULT_BOOSTED_LADDER)
        self.standard_ladder = Ladder.from_cfg(ladders.get("standard"), DEFAULT_STANDARD_LADDER)
        self.boosted_keywords = list(self.cfg.get("boosted_keywords", ["Mathematics", "English"]))
        self.best_of = int(self.cfg.get("best_of", 7))

    def _is_boosted(self, name: str) -> bool:
        return any(k in name for k in self.boosted_keywords)

    def _ladder_for(self, subject: SubjectResult, life_orientation: bool) -> Tuple[str, Ladder]:
        if life_orientation:
            return "LO", self.life_orientation_ladder
        if self._is_boosted(subject.name):
            return "BOOSTED", self.boosted_ladder
        return "STD", self.standard_ladder

    def points_for(self, subject: SubjectResult, life_orientation: bool = False) -> int:
        _, ladder = self._ladder_for(subject, life_orientation)
        return ladder.points(subject.percentage)

    def compute_score_with_breakdown(self, record: MatricRecord) -> Tuple[int, List[str]]:
        notes: List[str] = []
        scored = []
        for i, s in enumerate(record.subjects):
            is_lo = i == record.life_orientation_slot
            kind, ladder = self._ladder_for(s, is_lo)
            scored.append((s, kind, ladder.points(s.percentage)))

        scored.sort(key=lambda x: x[2], reverse=True)

        total = 0
        for s, kind, pts in scored[:self.best_of]:
            total += pts
            notes.append(f"ADD {kind} {s.name}: {s.percentage}% -> {pts}")
        for s, kind, pts in scored[self.best_of:]:
            notes.append(f"DROP {kind} {s.name}: {s.percentage}% -> {pts}")

        notes.append(f"APS = {total}")
        return total, notes
