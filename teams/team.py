# This class defines the team object

# External imports
import os
import pandas as pd

# Internal imports
from players.player import Player
from players.stats.batting import BattingStats
from players.stats.fielding import FieldingStats
from players.stats.pitching import PitchingStats

class Team:
    def __init__(self, tid, name='', lineup_size=9):
        self.id = tid
        self.name = name if name else tid
        self.roster = {} # Maps player name -> player object (roster order).
        self.lineup = [None for _ in range(lineup_size)] # list of player names.

    # Adds a player to the roster.
    #
    # Input:
    #  - name (str): player name, used as the player's identity
    #  - positions (str or list): position trail, ex. '2B / RP2'
    #  - batting_order (int): zero-indexed batting order slot, or None
    #
    # Output:
    #  Player
    def add_player(self, name, positions=None, batting_order=None):
        name = str(name).strip()
        assert(name)
        player = Player(name, batting_order=batting_order, positions=positions,
                        team_id=self.id)
        self.roster[name] = player
        if batting_order is not None and 0 <= batting_order < len(self.lineup):
            self.lineup[batting_order] = name
        return player

    # Player name batting in the given (zero-indexed) lineup slot.
    def lookup_batter(self, batting_order):
        if not 0 <= batting_order < len(self.lineup):
            return None
        return self.lineup[batting_order]

    # Player name currently playing the given position number (1-9).
    def lookup_fielder_by_position(self, position):
        if position not in Player.positions:
            return None
        for player in self.roster.values():
            if player.position_number == position:
                return player.name
        return None

    # Accumulator key of a player on this team. Player names are only unique
    # within a team.
    def player_key(self, name):
        return (self.id, name)

    def get_position_history(self, name):
        if name not in self.roster:
            return []
        return list(self.roster[name].position_history)

    def find_player(self, name):
        if not name:
            return None
        return self.roster.get(str(name).strip())

    # Marks the starting pitcher: a player listed only at 'P' becomes 'SP'.
    def normalize_starting_pitchers(self):
        changed = []
        for player in self.roster.values():
            if player.position_history == ['P']:
                player.set_positions(['SP'])
                changed.append(player.name)
        return changed

    # Highest relief pitcher number used so far (0 if none).
    def count_relief_pitchers(self):
        max_rp = 0
        for player in self.roster.values():
            for pos in player.position_history:
                num = Player.reliever_number(pos)
                if num is not None:
                    max_rp = max(max_rp, num)
        return max_rp

    # Records a pitching change in the position histories.
    #
    # The new pitcher is marked as the next relief pitcher (RP1, RP2, ...) and
    # the old pitcher takes over the new pitcher's previous position. If the
    # old pitcher isn't on the roster, the new pitcher is the starter.
    #
    # Input:
    #  - old_name (str): pitcher leaving the mound
    #  - new_name (str): pitcher entering
    #  - logger (Logger): optional
    #
    # Output:
    #  str describing the swap, or None if nothing changed
    def handle_position_swap(self, old_name, new_name, logger=None):
        if not old_name or not new_name or old_name == new_name:
            return None
        new_pitcher = self.find_player(new_name)
        old_pitcher = self.find_player(old_name)
        # New pitcher not found
        if new_pitcher is None:
            if logger:
                logger.warning(f'Position swap: {new_name} not found in {self.name} roster')
            return None
        # Old pitcher not found - first pitcher of the game
        if old_pitcher is None:
            new_pitcher.append_position('SP')
            message = f'{new_pitcher.name} moved to SP'
            if logger:
                logger.log(f'Position swap: {message}')
            return message
        # Re-entry is allowed, just flagged.
        if new_pitcher.has_pitched() and logger:
            logger.warning(f'Pitcher re-entry: {new_pitcher.name} already pitched this game ({new_pitcher.position_trail()})')
        # Old pitcher still listed only at 'P' is the starter
        if old_pitcher.position_history == ['P']:
            old_pitcher.set_positions(['SP'])
        new_pitcher_pos = new_pitcher.position
        notation = 'RP' + str(self.count_relief_pitchers() + 1)
        new_pitcher.append_position(notation)
        old_pitcher.append_position(new_pitcher_pos)
        message = f'{new_pitcher.name} moved to {notation}, {old_pitcher.name} moved to {new_pitcher_pos}'
        if logger:
            logger.log(f'Position swap: {message}')
        return message

    # Builds the box score tables for the team.
    #
    # Input:
    #  - accumulators (dict): player name -> PlayerAccumulator
    #
    # Output:
    #  (pitching and fielding DataFrame, batting DataFrame), one row per
    #  roster player in roster order, zeros for players without stats
    def stats_frames(self, accumulators):
        pitching_cols = ['IP'] + [s for s in PitchingStats.counting_stats if s != 'OUT']
        pf_rows = []
        b_rows = []
        names = list(self.roster.keys())
        for name in names:
            acc = accumulators.get(self.player_key(name))
            row = dict.fromkeys(pitching_cols + FieldingStats.counting_stats, 0)
            if acc and acc.pitching:
                row.update(acc.pitching.box_line())
            if acc and acc.fielding:
                row.update(acc.fielding.box_line())
            pf_rows.append(row)
            row = dict.fromkeys(BattingStats.counting_stats, 0)
            if acc and acc.batting:
                row.update(acc.batting.box_line())
            b_rows.append(row)
        pf_df = pd.DataFrame(pf_rows, index=pd.Index(names, name='name'),
                             columns=pitching_cols + FieldingStats.counting_stats)
        b_df = pd.DataFrame(b_rows, index=pd.Index(names, name='name'),
                            columns=BattingStats.counting_stats)
        pf_df.insert(0, 'POS', [self.roster[n].position_trail() for n in names])
        return pf_df, b_df

    # Save the game stats for each player on the team.
    def save_stats(self, path, accumulators):
        if not os.path.exists(path):
            os.makedirs(path)
        pf_df, b_df = self.stats_frames(accumulators)
        pf_df.to_csv(os.path.join(path, f'{self.id}-pitching.csv'))
        b_df.to_csv(os.path.join(path, f'{self.id}-batting.csv'))

    def __repr__(self):
        return f'Team({self.id!r}, roster={list(self.roster)!r})'
