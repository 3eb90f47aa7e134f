import pytest

from configuration import Configuration
from teams.team import Team


def make_team(tid, players, lineup_size=9):
    """Build a team from (name, position trail) pairs in batting order."""
    team = Team(tid, name=tid, lineup_size=lineup_size)
    for i, (name, positions) in enumerate(players):
        team.add_player(name, positions=positions,
                        batting_order=i if i < lineup_size else None)
    return team


def empty_grid(innings=3, lineup_size=9):
    return [['' for _ in range(innings)] for _ in range(lineup_size)]


@pytest.fixture
def away_team():
    return make_team('away', [
        ('A1', 'CF'), ('A2', 'SS'), ('A3', '1B'), ('A4', 'LF'), ('A5', 'C'),
        ('A6', '3B'), ('A7', 'RF'), ('A8', '2B'), ('A9', 'DH'),
    ])


@pytest.fixture
def home_team():
    return make_team('home', [
        ('Starter', 'SP / RF'), ('Reliever', 'RF / RP1 / LF'), ('Closer', 'LF / RP2'),
        ('H4', 'C'), ('H5', '1B'), ('H6', 'SS'), ('H7', '3B'), ('H8', '2B'),
        ('H9', 'CF'),
    ])


@pytest.fixture
def config(tmp_path):
    return Configuration(input_path=str(tmp_path / 'games'),
                         output_path=str(tmp_path / 'stats'),
                         log_path=str(tmp_path / 'logs'),
                         innings=3)
