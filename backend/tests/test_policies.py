import pytest

from backend.core.errors import CatalogError
from backend.core.ladder import Ladder
from backend.core.models import LIFE_ORIENTATION, MatricRecord, SubjectResult
from backend.institutions.seven_point.policy import SevenPointPolicy
from backend.institutions.wits.policy import WitsPolicy


def _record(*pairs):
    return MatricRecord(subjects=[SubjectResult(n, p) for n, p in pairs])


SUBJECTS = [
    ("Mathematics", 85),
    (LIFE_ORIENTATION, 70),
    ("English Home Language", 75),
    ("Afrikaans First Additional Language", 60),
    ("Physical Science", 80),
    ("Accounting", 55),
    ("Geography", 65),
]


@pytest.mark.parametrize("pct,points", [
    (100, 7), (80, 7), (79, 6), (70, 6), (69, 5), (60, 5), (59, 4),
    (50, 4), (49, 3), (40, 3), (39, 2), (30, 2), (29, 1), (0, 1),
])
def test_seven_point_ladder(pct, points):
    assert SevenPointPolicy().points_for(SubjectResult("Geography", pct)) == points


def test_seven_point_excludes_life_orientation():
    policy = SevenPointPolicy()
    score, notes = policy.compute_score_with_breakdown(_record(*SUBJECTS))
    # 7 + 6 + 5 + 7 + 4 + 5
    assert score == 34
    assert notes[0].startswith("SKIP Life Orientation")
    assert notes[-1] == "APS = 34"


def test_seven_point_life_orientation_mark_is_irrelevant():
    policy = SevenPointPolicy()
    scores = set()
    for pct in (0, 35, 70, 100):
        subjects = list(SUBJECTS)
        subjects[1] = (LIFE_ORIENTATION, pct)
        scores.add(policy.compute_score_with_breakdown(_record(*subjects))[0])
    assert scores == {34}


@pytest.mark.parametrize("pct,points", [
    (100, 4), (90, 4), (89, 3), (80, 3), (79, 2), (70, 2), (69, 1), (60, 1), (59, 0), (0, 0),
])
def test_wits_life_orientation_ladder(pct, points):
    assert WitsPolicy().points_for(SubjectResult(LIFE_ORIENTATION, pct), life_orientation=True) == points


@pytest.mark.parametrize("pct,points", [
    (90, 10), (89, 9), (80, 9), (79, 8), (70, 8), (69, 7), (60, 7),
    (59, 4), (50, 4), (49, 3), (40, 3), (39, 0),
])
def test_wits_boosted_ladder(pct, points):
    assert WitsPolicy().points_for(SubjectResult("Mathematics", pct)) == points


@pytest.mark.parametrize("pct,points", [
    (90, 8), (89, 7), (80, 7), (79, 6), (70, 6), (69, 5), (60, 5),
    (59, 4), (50, 4), (49, 3), (40, 3), (39, 0),
])
def test_wits_standard_ladder(pct, points):
    assert WitsPolicy().points_for(SubjectResult("History", pct)) == points


@pytest.mark.parametrize("name,boosted", [
    ("Mathematics", True),
    ("Advanced Mathematics", True),
    ("English Home Language", True),
    ("English First Additional Language", True),
    ("Mathematical Literacy", False),
    ("english", False),
    ("Physical Science", False),
])
def test_wits_boost_is_substring_match(name, boosted):
    expected = 7 if boosted else 5
    assert WitsPolicy().points_for(SubjectResult(name, 65)) == expected


def test_wits_sums_all_seven_including_life_orientation():
    policy = WitsPolicy()
    record = _record(*SUBJECTS)
    score, _ = policy.compute_score_with_breakdown(record)
    # 9 + 2 + 8 + 5 + 7 + 4 + 5
    assert score == 40
    independent = sum(
        policy.points_for(s, life_orientation=(i == 1)) for i, s in enumerate(record.subjects)
    )
    assert score == independent


def test_wits_best_of_keeps_highest_points():
    policy = WitsPolicy({"best_of": 6})
    score, notes = policy.compute_score_with_breakdown(_record(*SUBJECTS))
    # Life Orientation (2) is the lowest and is dropped
    assert score == 38
    assert any(n.startswith("DROP LO Life Orientation") for n in notes)


def test_policy_reads_ladder_from_config():
    cfg = {"ladder": {"steps": [{"min": 50, "points": 2}], "floor": 0}}
    policy = SevenPointPolicy(cfg)
    assert policy.points_for(SubjectResult("Geography", 55)) == 2
    assert policy.points_for(SubjectResult("Geography", 45)) == 0


def test_malformed_ladder_config():
    with pytest.raises(CatalogError):
        SevenPointPolicy({"ladder": {"steps": [{"points": 2}]}})


def test_ladder_orders_steps():
    ladder = Ladder([(30, 1), (70, 3), (50, 2)])
    assert ladder.points(75) == 3
    assert ladder.points(55) == 2
    assert ladder.points(10) == 0
