# This file defines the game state.
#
# A game file is a yaml document with the two teams' rosters and at-bat
# grids (rows = batting order, columns = innings):
#
#   id: G01
#   date: 2025-06-01
#   away:
#     name: Cubs
#     roster:
#       - {name: Smith, position: SS}
#       - {name: Jones, position: 2B / RP1}
#       ...
#     atbats:
#       - [1B, '', K]
#       - [HR 2RBI, '', '']
#       ...
#   home:
#     ...

# External imports
import datetime
import os
from pathlib import Path
import pandas as pd
import yaml

# Internal imports
from errors import BoxScoreError
from processors.processor import calculate_inherited_runners
from teams.team import Team

sides = {'away': 0, 'home': 1}


def side_index(side):
    if side in (0, 1):
        return side
    if side in sides:
        return sides[side]
    raise BoxScoreError(f'Unknown team side {side!r}, expected away or home.')


# Game date, either parsed by yaml already or an ISO string (YYYY-MM-DD)
def parse_date(value, game_id):
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value))
    except ValueError as e:
        raise BoxScoreError(f'Game {game_id} date {value!r} is not YYYY-MM-DD.') from e


# Zero-indexed lineup slot from a roster entry's 1-indexed 'order'
def parse_order(entry, i, team_name):
    try:
        order = int(entry['order'])
    except (TypeError, ValueError) as e:
        raise BoxScoreError(f'{team_name} roster entry {i+1} order {entry["order"]!r} '
                            f'is not a number.') from e
    if order < 1:
        raise BoxScoreError(f'{team_name} roster entry {i+1} order must be 1 or more, got {order}.')
    return order - 1


# Normalizes raw at-bat rows into a rectangular grid of strings.
#
# Input:
#  - rows (list of lists): raw cell values (None, numbers and blanks allowed)
#  - nrows (int): lineup size
#  - ncols (int): minimum number of inning columns
#
# Output:
#  list of lists of str, '' for empty cells
def normalize_grid(rows, nrows, ncols):
    rows = rows or []
    if not isinstance(rows, list):
        raise BoxScoreError(f'At-bat grid must be a list of rows, got {type(rows).__name__}.')
    for i, row in enumerate(rows):
        # A bare string row would be split into characters
        if row is not None and not isinstance(row, list):
            raise BoxScoreError(f'At-bat row {i+1} must be a list of cells, got {row!r}.')
    if len(rows) > nrows:
        raise BoxScoreError(f'At-bat grid has {len(rows)} rows, lineup has {nrows} slots.')
    df = pd.DataFrame([r if r is not None else [] for r in rows])
    width = max(ncols, df.shape[1])
    df = df.reindex(index=range(nrows), columns=range(width))
    df = df.fillna('').astype(str).apply(lambda col: col.str.strip())
    return df.values.tolist()


# Finds the last filled at-bat cell, scanning from the latest inning back and
# from the bottom of the order up.
def find_last_at_bat_cell(grid):
    if not grid:
        return None
    for col in range(len(grid[0]) - 1, -1, -1):
        for row in range(len(grid) - 1, -1, -1):
            if grid[row][col]:
                return (row, col)
    return None


# Finds the next empty at-bat cell: the first empty cell of the latest inning
# with data, or the top of the next inning when that one is full.
def find_next_at_bat_cell(grid):
    if not grid:
        return None
    ncols = len(grid[0])
    last_col = -1
    for col in range(ncols):
        if any(row[col] for row in grid):
            last_col = col
    if last_col == -1:
        return (0, 0) if ncols else None
    for row in range(len(grid)):
        if not grid[row][last_col]:
            return (row, last_col)
    if last_col + 1 < ncols:
        return (0, last_col + 1)
    return None


class GameState:
    def __init__(self, game_id, config=None):
        # Id
        self.id = game_id
        self.date = None
        self.config = config
        self.innings = config.innings if config else 6
        self.lineup_size = config.lineup_size if config else 9
        self.teams = [None, None] # [away, home]
        self.grids = [None, None] # [away, home]

    # Loads a game file.
    #
    # Input:
    #  - path (str): yaml game file
    #  - config (Configuration): optional
    #
    # Output:
    #  GameState
    @classmethod
    def load(cls, path, config=None):
        with open(path, 'r') as yamlfile:
            data = yaml.safe_load(yamlfile)
        if not isinstance(data, dict):
            raise BoxScoreError(f'{path} is not a game file.')
        return cls.from_dict(data, config=config, default_id=Path(path).stem)

    @classmethod
    def from_dict(cls, data, config=None, default_id='game'):
        game = cls(str(data.get('id', default_id)), config=config)
        if data.get('date'):
            game.date = parse_date(data['date'], game.id)
        for side, idx in sides.items():
            if side not in data or not isinstance(data[side], dict):
                raise BoxScoreError(f'Game {game.id} is missing the {side} team.')
            team_data = data[side]
            game.teams[idx] = game.build_team(team_data, side)
            try:
                game.grids[idx] = normalize_grid(team_data.get('atbats'),
                                                 game.lineup_size, game.innings)
            except BoxScoreError as e:
                raise BoxScoreError(f'Game {game.id} {side} atbats: {e}') from e
        # Accumulators are keyed by team id
        if game.teams[0].id == game.teams[1].id:
            raise BoxScoreError(f'Game {game.id}: both teams have the id {game.teams[0].id!r}.')
        return game

    def build_team(self, team_data, side):
        team = Team(str(team_data.get('id', side)),
                    name=str(team_data.get('name', side)),
                    lineup_size=self.lineup_size)
        roster = team_data.get('roster') or []
        if not isinstance(roster, list):
            raise BoxScoreError(f'{team.name} roster must be a list.')
        for i, entry in enumerate(roster):
            if isinstance(entry, str):
                entry = {'name': entry}
            if not isinstance(entry, dict):
                raise BoxScoreError(f'{team.name} roster entry {i+1} must be a name or a mapping, got {entry!r}.')
            if not entry.get('name'):
                raise BoxScoreError(f'{team.name} roster entry {i+1} has no name.')
            name = str(entry['name']).strip()
            if team.find_player(name):
                raise BoxScoreError(f'{team.name} roster lists {name} twice.')
            # Explicit 1-indexed batting order, else roster order
            order = parse_order(entry, i, team.name) if entry.get('order') is not None else i
            if order < self.lineup_size and team.lookup_batter(order) is not None:
                raise BoxScoreError(f'{team.name} lineup slot {order+1} is taken by '
                                    f'{team.lookup_batter(order)} and {name}.')
            team.add_player(name,
                            positions=entry.get('position'),
                            batting_order=order if order < self.lineup_size else None)
        return team

    # Grid collaborator: the team's at-bat grid as rows of strings.
    def read_team_grid(self, side):
        grid = self.grids[side_index(side)]
        return [list(row) for row in grid]

    def write_cell(self, side, row, col, value):
        self.grids[side_index(side)][row][col] = str(value).strip()

    def find_last_at_bat_cell(self, side):
        return find_last_at_bat_cell(self.grids[side_index(side)])

    def find_next_at_bat_cell(self, side):
        return find_next_at_bat_cell(self.grids[side_index(side)])

    # Records a pitching change made by the fielding team.
    #
    # Updates the position histories and, if enabled, appends 'PC<n>' to the
    # batting team's last at-bat with an estimate of the runners on base.
    #
    # Input:
    #  - fielding_side (str or int): team making the change
    #  - old_pitcher (str), new_pitcher (str): player names
    #  - logger (Logger): optional
    #
    # Output:
    #  number of inherited runners written, or None if no PC was inserted
    def change_pitcher(self, fielding_side, old_pitcher, new_pitcher, logger=None):
        fielding_idx = side_index(fielding_side)
        self.teams[fielding_idx].handle_position_swap(old_pitcher, new_pitcher, logger=logger)
        if self.config is not None and not self.config.auto_insert_pitcher_change:
            return None
        return self.auto_insert_pitcher_change(1 - fielding_idx, logger=logger)

    def auto_insert_pitcher_change(self, batting_side, logger=None):
        batting_idx = side_index(batting_side)
        cell = self.find_last_at_bat_cell(batting_idx)
        if cell is None:
            if logger:
                logger.warning('No at-bat entries found for pitcher change')
            return None
        row, col = cell
        grid = self.grids[batting_idx]
        inherited = calculate_inherited_runners(grid, col)
        current = grid[row][col]
        grid[row][col] = f'{current} PC{inherited}'
        if logger:
            logger.log(f'Appended PC{inherited} to batter {row+1} inning {col+1} (was: {current})')
        return inherited

    # Removes every at-bat entry.
    def clear_at_bats(self):
        for idx in (0, 1):
            self.grids[idx] = [['' for _ in row] for row in self.grids[idx]]

    def to_dict(self):
        data = {'id': self.id}
        if self.date:
            data['date'] = self.date.isoformat()
        for side, idx in sides.items():
            team = self.teams[idx]
            roster = []
            for player in team.roster.values():
                entry = {'name': player.name, 'position': player.position_trail()}
                if player.batting_order is not None:
                    entry['order'] = player.batting_order + 1
                roster.append(entry)
            data[side] = {'id': team.id,
                          'name': team.name,
                          'roster': roster,
                          'atbats': self.read_team_grid(idx)}
        return data

    def dump(self, path):
        with open(path, 'w') as yamlfile:
            yaml.safe_dump(self.to_dict(), yamlfile, sort_keys=False)

    # Saves the stat tables for both teams.
    def save(self, path, result):
        path = os.path.join(path, self.id)
        for team in self.teams:
            team.save_stats(path, result['accumulators'])
