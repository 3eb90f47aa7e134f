# This file defines the pitching stats for each player.

# External imports
import numpy as np
import pandas as pd

# Internal imports
from processors.notation import innings_pitched

# Class for accumulating a pitcher's stats over one game replay
class PitchingStats:

    # Counting stats (in box score column order)
    counting_stats = ['BF',     # Batters faced
                      'OUT',    # Outs recorded
                      'H',      # Hits allowed
                      'HR',     # Homeruns allowed
                      'R',      # Runs allowed (including inherited runners who scored)
                      'BB',     # Base on balls (walks) allowed
                      'K']      # Strikeouts

    # Derived stats:
    #  * IP - Innings pitched, .33/.67 for partial innings
    #  * WHIP - Walks hits over innings pitched
    derived_stats = {'IP': lambda df: innings_pitched(df['OUT']),
                     'WHIP': lambda df: (df['BB']+df['H'])/(df['OUT']/3) if df['OUT'] > 0 else 0}

    stats = counting_stats + list(derived_stats.keys())

    def __init__(self, player_id):
        # Player associated with these stats
        self.pid = player_id
        # Initialize in-game counting stats
        self.in_game_stats = {stat_name: 0 for stat_name in PitchingStats.counting_stats}

    # Increments count for the given list of stats
    def increment_stats(self, stats):
        for name in stats:
            self.in_game_stats[name] += 1

    # Adds the value to the given stat
    def add_to_stat(self, stat, value):
        self.in_game_stats[stat] += value

    def get_derived_stats(self):
        return {name: calc(self.in_game_stats)
                for name, calc in PitchingStats.derived_stats.items()}

    # Box score line: IP first, then the counting stats without outs
    def box_line(self):
        line = {'IP': innings_pitched(self.in_game_stats['OUT'])}
        for stat in PitchingStats.counting_stats:
            if stat != 'OUT':
                line[stat] = self.in_game_stats[stat]
        return line

    def to_series(self):
        values = dict(self.in_game_stats)
        values.update(self.get_derived_stats())
        return pd.Series(values, dtype=np.float64)

    def __eq__(self, other):
        return isinstance(other, PitchingStats) and self.in_game_stats == other.in_game_stats

    def __repr__(self):
        return f'PitchingStats({self.pid!r}, {self.in_game_stats!r})'
