from typing import Dict, FrozenSet, Iterable, Optional

PERSONALITY_GROUPS = ("Analytical", "Creative", "Practical", "Social")

# 16-type quiz labels -> broad group
TYPE_GROUPS: Dict[str, str] = {
    "INTJ": "Analytical", "INTP": "Analytical", "ENTJ": "Analytical", "ENTP": "Analytical",
    "INFJ": "Social", "INFP": "Social", "ENFJ": "Social", "ENFP": "Creative",
    "ISTJ": "Practical", "ISFJ": "Practical", "ESTJ": "Practical", "ESFJ": "Social",
    "ISTP": "Practical", "ISFP": "Creative", "ESTP": "Creative", "ESFP": "Creative",
}


def group_for(label: Optional[str]) -> Optional[str]:
    if not label:
        return None
    if label in PERSONALITY_GROUPS:
        return label
    return TYPE_GROUPS.get(label)


def expand_labels(labels: Iterable[str]) -> FrozenSet[str]:
    """Add every 16-type label that belongs to one of the given groups."""
    out = set(labels)
    for t, g in TYPE_GROUPS.items():
        if g in out:
            out.add(t)
    return frozenset(out)
