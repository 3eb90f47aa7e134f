# This file defines the per-player stat accumulator built during a replay.
#
# An accumulator is created the first time a player contributes to a stat and
# holds up to three independent stat records. Accumulators are never reused
# across replays; every replay starts from an empty mapping.

# Internal imports
from players.stats.batting import BattingStats
from players.stats.fielding import FieldingStats
from players.stats.pitching import PitchingStats

class PlayerAccumulator:
    def __init__(self, pid):
        self.id = pid
        # Stats
        self.pitching = None
        self.batting = None
        self.fielding = None

    def ensure_pitching(self):
        if self.pitching is None:
            self.pitching = PitchingStats(self.id)
        return self.pitching

    def ensure_batting(self):
        if self.batting is None:
            self.batting = BattingStats(self.id)
        return self.batting

    def ensure_fielding(self):
        if self.fielding is None:
            self.fielding = FieldingStats(self.id)
        return self.fielding

    def __eq__(self, other):
        return (isinstance(other, PlayerAccumulator)
                and self.id == other.id
                and self.pitching == other.pitching
                and self.batting == other.batting
                and self.fielding == other.fielding)

    def __repr__(self):
        return (f'PlayerAccumulator({self.id!r}, pitching={self.pitching!r}, '
                f'batting={self.batting!r}, fielding={self.fielding!r})')


# Returns the accumulator for the player, creating it if absent.
def get_accumulator(accumulators, pid):
    if pid not in accumulators:
        accumulators[pid] = PlayerAccumulator(pid)
    return accumulators[pid]
