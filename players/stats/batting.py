# This file defines the batting stats for each player.

# External imports
import numpy as np
import pandas as pd

# Class for accumulating a hitter's stats over one game replay
class BattingStats:

    # Counting stats (in box score column order)
    counting_stats = ['AB',     # At-bats
                      'H',      # Hits
                      'HR',     # Homeruns
                      'RBI',    # Runs batted in
                      'BB',     # Base on balls (walks)
                      'K',      # Strikeouts
                      'ROB',    # Hits robbed by a nice play
                      'DP',     # Grounded into double (or triple) plays
                      'TB']     # Total bases

    # Derived stats:
    #  * AVG - Batting average
    #  * XBH - Doubles and triples, approximated from total bases
    derived_stats = {'AVG': lambda df: round(df['H']/df['AB'], 3) if df['AB'] != 0 else 0,
                     'XBH': lambda df: max(df['TB']-df['H']-(df['HR']*3), 0)}

    stats = counting_stats + list(derived_stats.keys())

    def __init__(self, player_id):
        # Player associated with these stats
        self.pid = player_id
        # Initialize in-game counting stats
        self.in_game_stats = {stat_name: 0 for stat_name in BattingStats.counting_stats}

    # Increments count for the given list of stats
    def increment_stats(self, stats):
        for name in stats:
            self.in_game_stats[name] += 1

    # Adds the value to the given stat
    def add_to_stat(self, stat, value):
        self.in_game_stats[stat] += value

    def get_derived_stats(self):
        return {name: calc(self.in_game_stats)
                for name, calc in BattingStats.derived_stats.items()}

    def box_line(self):
        return dict(self.in_game_stats)

    def to_series(self):
        values = dict(self.in_game_stats)
        values.update(self.get_derived_stats())
        return pd.Series(values, dtype=np.float64)

    def __eq__(self, other):
        return isinstance(other, BattingStats) and self.in_game_stats == other.in_game_stats

    def __repr__(self):
        return f'BattingStats({self.pid!r}, {self.in_game_stats!r})'
