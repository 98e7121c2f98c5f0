from typing import Any

from courtqueue.core.players import skill_of, skill_value
from courtqueue.models import Player


def balance_doubles_teams(
    players: list[str], registered_players: dict[str, Player]
) -> dict[str, Any] | None:
    """
    Split four players into two teams of similar strength.

    Players are ranked by skill, strongest first; the strongest pairs with the
    weakest and the middle two play together. Ties keep their incoming order.
    """
    if len(players) != 4:
        return None

    ranked = sorted(players, key=lambda name: skill_value(name, registered_players), reverse=True)
    team1 = [ranked[0], ranked[3]]
    team2 = [ranked[1], ranked[2]]

    return {
        "team1": team1,
        "team2": team2,
        "team1_avg": sum(skill_value(name, registered_players) for name in team1) / 2,
        "team2_avg": sum(skill_value(name, registered_players) for name in team2) / 2,
    }


def balance_singles_teams(players: list[str]) -> dict[str, Any] | None:
    if len(players) != 2:
        return None
    return {"team1": [players[0]], "team2": [players[1]]}


def balance_teams(players: list[str], registered_players: dict[str, Player]) -> dict[str, Any] | None:
    if len(players) == 2:
        return balance_singles_teams(players)
    return balance_doubles_teams(players, registered_players)


def split_teams(players: list[str]) -> tuple[list[str], list[str]]:
    """Split players into two halves in their current order."""
    half = len(players) // 2
    return list(players[:half]), list(players[half:])


def balance_quality_label(team1_avg: float, team2_avg: float) -> str:
    diff = abs(team1_avg - team2_avg)

    if diff == 0:
        return "Perfect Balance"
    if diff <= 0.5:
        return "Excellent Balance"
    if diff <= 1.0:
        return "Good Balance"
    if diff <= 1.5:
        return "Fair Balance"
    return "Unbalanced"


def format_team(team: list[str], registered_players: dict[str, Player]) -> str:
    """Render a team as ``Name (S), Name (S)`` with the skill initial."""
    return ", ".join(
        f"{name} ({skill_of(name, registered_players).value[0].upper()})" for name in team
    )
