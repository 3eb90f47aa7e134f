# This file defines the fielding stats for each player.

# External imports
import numpy as np
import pandas as pd

class FieldingStats:

    counting_stats = ['NP',     # Nice plays
                      'E',      # Errors
                      'SB']     # Stolen bases, credited to the batter's row

    stats = counting_stats

    def __init__(self, player_id):
        self.pid = player_id
        self.in_game_stats = {stat_name: 0 for stat_name in FieldingStats.counting_stats}

    def increment_stats(self, stats):
        for name in stats:
            self.in_game_stats[name] += 1

    def add_to_stat(self, stat, value):
        self.in_game_stats[stat] += value

    def box_line(self):
        return dict(self.in_game_stats)

    def to_series(self):
        return pd.Series(self.in_game_stats, dtype=np.float64)

    def __eq__(self, other):
        return isinstance(other, FieldingStats) and self.in_game_stats == other.in_game_stats

    def __repr__(self):
        return f'FieldingStats({self.pid!r}, {self.in_game_stats!r})'
