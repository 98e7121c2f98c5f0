"""
Unit tests for team balancing helpers.
"""

from courtqueue.core.team_balancing import (
    balance_doubles_teams,
    balance_quality_label,
    balance_singles_teams,
    balance_teams,
    format_team,
    split_teams,
)
from courtqueue.models import Player, SkillLevel


def _registry(**skills):
    return {name: Player(skill_level=skill) for name, skill in skills.items()}


def test_balance_doubles_pairs_strongest_with_weakest():
    registry = _registry(
        Pro=SkillLevel.PROFESSIONAL,
        Newbie=SkillLevel.BEGINNER,
        Ace=SkillLevel.ADVANCED,
        Mid=SkillLevel.INTERMEDIATE,
    )

    teams = balance_doubles_teams(["Pro", "Newbie", "Ace", "Mid"], registry)

    assert teams["team1"] == ["Pro", "Newbie"]
    assert teams["team2"] == ["Ace", "Mid"]
    assert teams["team1_avg"] == 2.5
    assert teams["team2_avg"] == 2.5
    assert balance_quality_label(teams["team1_avg"], teams["team2_avg"]) == "Perfect Balance"


def test_balance_doubles_is_stable_for_equal_skills():
    teams = balance_doubles_teams(["A", "B", "C", "D"], {})

    assert teams["team1"] == ["A", "D"]
    assert teams["team2"] == ["B", "C"]


def test_balance_doubles_requires_four_players():
    assert balance_doubles_teams(["A", "B"], {}) is None


def test_balance_singles():
    assert balance_singles_teams(["A", "B"]) == {"team1": ["A"], "team2": ["B"]}
    assert balance_singles_teams(["A"]) is None
    assert balance_teams(["A", "B"], {}) == {"team1": ["A"], "team2": ["B"]}


def test_split_teams_keeps_order():
    assert split_teams(["A", "B", "C", "D"]) == (["A", "B"], ["C", "D"])
    assert split_teams(["A", "B"]) == (["A"], ["B"])


def test_balance_quality_labels():
    assert balance_quality_label(2.0, 2.5) == "Excellent Balance"
    assert balance_quality_label(2.0, 3.0) == "Good Balance"
    assert balance_quality_label(1.5, 3.0) == "Fair Balance"
    assert balance_quality_label(1.0, 3.5) == "Unbalanced"


def test_format_team():
    registry = _registry(Pro=SkillLevel.PROFESSIONAL, Newbie=SkillLevel.BEGINNER)

    assert format_team(["Pro", "Newbie"], registry) == "Pro (P), Newbie (B)"
