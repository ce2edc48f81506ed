from typing import Any, Dict, Iterable, List, Optional, Tuple

from backend.core.errors import CatalogError


class Ladder:
    """
    Threshold ladder: the first step whose minimum the percentage reaches wins,
    scanning from the highest minimum down; below every step -> floor.
    """

    def __init__(self, steps: Iterable[Tuple[int, int]], floor: int = 0):
        self.steps: List[Tuple[int, int]] = sorted(
            ((int(m), int(p)) for m, p in steps), key=lambda x: x[0], reverse=True
        )
        self.floor = int(floor)
        if not self.steps:
            raise CatalogError("ladder needs at least one step")

    @classmethod
    def from_cfg(cls, cfg: Optional[Dict[str, Any]], default: "Ladder") -> "Ladder":
        if not cfg:
            return default
        try:
            steps = [(s["min"], s["points"]) for s in cfg["steps"]]
        except (KeyError, TypeError) as e:
            raise CatalogError(f"Malformed ladder config: {cfg!r}") from e
        return cls(steps, floor=cfg.get("floor", default.floor))

    def points(self, percentage: int) -> int:
        for minimum, pts in self.steps:
            if percentage >= minimum:
                return pts
        return self.floor

    def __repr__(self) -> str:
        return f"Ladder({self.steps!r}, floor={self.floor})"
