# This file defines the game processor object.
#
# The processor replays a team's at-bat grid from scratch, column by column
# (inning by inning) and row by row (batter by batter), and accumulates every
# player's pitching, batting and fielding stats. It never works from a delta:
# each call rebuilds the stats from the full grid, so re-running it on the
# same input gives the same result.

# External imports
import os

# Internal imports
from errors import BoxScoreError
from players.accumulator import get_accumulator
from players.player import Player
from processors.log import Logger
from processors.notation import is_blank, parse_notation


# Builds the pitcher timeline for the fielding team from the position
# histories: 'SP' is the starter (index 0) and 'RPn' is the nth reliever.
#
# Input:
#  - team (Team): fielding team
#
# Output:
#  list of player names, None for any relief number nobody holds
def build_pitcher_timeline(team):
    if team is None:
        raise BoxScoreError('Cannot build a pitcher timeline without a team.')
    slots = {}
    for player in team.roster.values():
        for pos in player.position_history:
            if Player.starter_ptrn.match(pos):
                slots[0] = player.name
            num = Player.reliever_number(pos)
            if num is not None:
                slots[num] = player.name
    if not slots:
        return []
    timeline = [None for _ in range(max(slots) + 1)]
    for idx, name in slots.items():
        timeline[idx] = name
    return timeline


# Checks the at-bat grid against the batting team's lineup.
def validate_grid(grid, team):
    if team is None:
        raise BoxScoreError('Batting team roster is missing.')
    if grid is None:
        raise BoxScoreError(f'At-bat grid for {team.name} is missing.')
    if len(grid) != len(team.lineup):
        raise BoxScoreError(f'At-bat grid for {team.name} has {len(grid)} rows, '
                            f'expected one per lineup slot ({len(team.lineup)}).')
    widths = set(len(row) for row in grid)
    if len(widths) > 1:
        raise BoxScoreError(f'At-bat grid for {team.name} is not rectangular '
                            f'(row lengths {sorted(widths)}).')


# Estimates the runners left on base in an inning, used to fill in the PC
# notation when the scorer changes pitchers.
#
# Runners reach on hits, walks, errors and fielder's choices, come off the
# bases when they score, and the inning is over after three outs. If the
# given column is empty (change at the start of an inning) the previous
# column is read instead.
#
# Input:
#  - grid (list of lists): batting team's at-bat grid
#  - col (int): zero-indexed inning column
#
# Output:
#  int between 0 and 3
def calculate_inherited_runners(grid, col):
    if not grid or not grid[0]:
        return 0
    has_data = any(not is_blank(row[col]) for row in grid)
    if not has_data:
        if col == 0:
            return 0
        col -= 1
    runners_on_base = 0
    outs_recorded = 0
    for row in grid:
        value = row[col]
        if is_blank(value):
            continue
        # Pitching change cells aren't at-bats
        if str(value).strip().upper().startswith('PC'):
            continue
        outcome = parse_notation(value)
        if (outcome.hits_allowed > 0 or
                outcome.walks_allowed > 0 or
                outcome.error_occurred or
                outcome.is_error or
                outcome.fielders_choice_no_out):
            runners_on_base += 1
        if outcome.runs_allowed > 0:
            runners_on_base = max(0, runners_on_base - outcome.runs_allowed)
        outs_recorded += outcome.outs_recorded
    if outs_recorded >= 3:
        return 0
    return min(3, runners_on_base)


class Processor:

    def __init__(self, config=None, logger=None):
        # Configuration parameters
        self.config = config
        self.logger = logger
        # Without a logger from the caller, each game gets its own log file
        self.log_per_game = logger is None
        # Replay state for the team being processed
        self.timeline = []
        self.pitcher_index = 0
        self.active_pitcher = None
        self.previous_pitcher = None
        self.inherited_runners = 0

    def log(self, message=''):
        if self.logger:
            self.logger.log(message)

    def warn(self, message):
        if self.logger:
            self.logger.warning(message)

    def reset_state(self, timeline):
        self.timeline = list(timeline)
        self.pitcher_index = 0
        self.active_pitcher = self.timeline[0] if self.timeline else None
        self.previous_pitcher = None
        self.inherited_runners = 0

    # Moves to the next pitcher in the timeline. The index only moves
    # forward; a slot past the end of the timeline means no active pitcher.
    def advance_pitcher(self, inherited_runners):
        self.previous_pitcher = self.active_pitcher
        self.pitcher_index += 1
        self.active_pitcher = (self.timeline[self.pitcher_index]
                               if self.pitcher_index < len(self.timeline)
                               else None)
        self.inherited_runners = inherited_runners
        self.log(f'Pitching change: {self.previous_pitcher} -> {self.active_pitcher} '
                 f'({inherited_runners} inherited)')
        if self.active_pitcher is None:
            self.warn(f'No pitcher at timeline slot {self.pitcher_index}, '
                     f'pitching stats are not credited')

    # Splits the runs scored on a play between the previous pitcher (who put
    # the inherited runners on base) and the active pitcher.
    def attribute_runs(self, runs, fielding, accumulators):
        if runs <= 0:
            return
        active = accumulators[fielding.player_key(self.active_pitcher)].pitching
        credited = min(runs, self.inherited_runners)
        if credited > 0:
            previous = (accumulators.get(fielding.player_key(self.previous_pitcher))
                        if self.previous_pitcher else None)
            if previous and previous.pitching:
                previous.pitching.add_to_stat('R', credited)
            self.inherited_runners -= credited
        active.add_to_stat('R', runs - credited)

    # Credits a nice play or error to whoever currently plays the position.
    def attribute_fielding(self, stat, position, fielding, accumulators):
        fielder = fielding.lookup_fielder_by_position(position)
        if fielder is None:
            self.warn(f'No {fielding.name} fielder at position {position}, {stat} not credited')
            return None
        get_accumulator(accumulators, fielding.player_key(fielder)).ensure_fielding().increment_stats([stat])
        return fielder

    # Replays one team's at-bats.
    #
    # Input:
    #  - grid (list of lists): rows = batting order, columns = innings
    #  - timeline (list): fielding team's pitchers, [SP, RP1, RP2, ...]
    #  - batting (Team): team at bat
    #  - fielding (Team): team in the field
    #  - accumulators (dict): optional, (team id, player name) ->
    #                         PlayerAccumulator, updated in place
    #
    # Output:
    #  {'accumulators': dict,
    #   'final_state': {'active_pitcher': str, 'inherited_runners': int}}
    #
    def replay_team(self, grid, timeline, batting, fielding, accumulators=None):
        validate_grid(grid, batting)
        if fielding is None:
            raise BoxScoreError('Fielding team roster is missing.')
        if fielding is not batting and fielding.id == batting.id:
            raise BoxScoreError(f'Both teams have the id {batting.id!r}.')
        if timeline is None:
            raise BoxScoreError(f'Pitcher timeline for {fielding.name} is missing.')
        if accumulators is None:
            accumulators = {}
        self.reset_state(timeline)
        if self.logger:
            self.logger.divider(f'{batting.name} batting, {fielding.name} pitching')
        self.log(f'Pitcher timeline: {self.timeline}')

        ncols = len(grid[0]) if grid else 0
        for col in range(ncols):
            for row in range(len(grid)):
                value = grid[row][col]
                if is_blank(value):
                    continue
                outcome = parse_notation(value)
                self.log(f'Inning {col+1} Batter {row+1}: {str(value).strip()}')

                # Standalone pitching change, no at-bat in this cell
                if outcome.is_pitcher_change and outcome.batters_faced == 0:
                    self.advance_pitcher(outcome.inherited_runners)
                    continue

                batter = batting.lookup_batter(row)
                if batter is None:
                    self.warn(f'No {batting.name} batter in lineup slot {row+1}, cell skipped')
                    continue
                batter_acc = get_accumulator(accumulators, batting.player_key(batter))
                batter_acc.ensure_batting()
                batter_acc.ensure_fielding()
                pitching_stats = None
                if self.active_pitcher:
                    pitcher_acc = get_accumulator(accumulators, fielding.player_key(self.active_pitcher))
                    pitching_stats = pitcher_acc.ensure_pitching()

                #
                # Batting stats
                batting_stats = batter_acc.batting
                batting_stats.add_to_stat('AB', outcome.at_bats)
                batting_stats.add_to_stat('H', outcome.hits_allowed)
                batting_stats.add_to_stat('HR', outcome.home_runs_allowed)
                batting_stats.add_to_stat('RBI', outcome.runs_allowed)
                batting_stats.add_to_stat('BB', outcome.walks_allowed)
                batting_stats.add_to_stat('K', outcome.strikeouts)
                batting_stats.increment_stats(['DP'] if outcome.double_play else [])
                batting_stats.add_to_stat('TB', outcome.total_bases)

                #
                # Pitching stats (active pitcher)
                if pitching_stats is not None:
                    pitching_stats.add_to_stat('BF', outcome.batters_faced)
                    pitching_stats.add_to_stat('OUT', outcome.outs_recorded)
                    pitching_stats.add_to_stat('H', outcome.hits_allowed)
                    pitching_stats.add_to_stat('HR', outcome.home_runs_allowed)
                    pitching_stats.add_to_stat('BB', outcome.walks_allowed)
                    pitching_stats.add_to_stat('K', outcome.strikeouts)
                    self.attribute_runs(outcome.runs_allowed, fielding, accumulators)

                #
                # Fielding stats
                if outcome.is_nice_play and outcome.fielder_position:
                    if self.attribute_fielding('NP', outcome.fielder_position, fielding, accumulators):
                        # Batter was robbed of a hit
                        batting_stats.increment_stats(['ROB'])
                if outcome.is_error and outcome.fielder_position:
                    self.attribute_fielding('E', outcome.fielder_position, fielding, accumulators)
                if outcome.stolen_base:
                    batter_acc.fielding.increment_stats(['SB'])

                # Pitching change after the at-bat ('K PC2'). The departing
                # pitcher is credited with this cell.
                if outcome.is_pitcher_change:
                    self.advance_pitcher(outcome.inherited_runners)

            # Inherited runners don't carry over to the next inning
            if self.inherited_runners:
                self.log(f'End of inning {col+1}: {self.inherited_runners} inherited runner(s) cleared')
            self.inherited_runners = 0

        return {'accumulators': accumulators,
                'final_state': {'active_pitcher': self.active_pitcher,
                                'inherited_runners': self.inherited_runners}}

    # Replays both halves of a game: the away team bats against the home
    # team's pitchers, then the home team bats against the away team's.
    #
    # Input:
    #  - game (GameState)
    #
    # Output:
    #  {'accumulators': dict, 'final_state': [away state, home state]}
    #
    def process_game(self, game):
        if game is None or None in game.teams:
            raise BoxScoreError('Game is missing a team.')
        if self.config is not None and self.log_per_game:
            self.logger = Logger(os.path.join(self.config.log_path, f'{game.id}.log'))
        self.log(game.id)

        # Mark starting pitchers before the timelines are built
        if self.config is None or self.config.normalize_starting_pitchers:
            for team in game.teams:
                for name in team.normalize_starting_pitchers():
                    self.log(f'{team.name}: {name} marked as starting pitcher')

        accumulators = {}
        final_state = [None, None]
        for side in (0, 1):
            batting = game.teams[side]
            fielding = game.teams[1 - side]
            timeline = build_pitcher_timeline(fielding)
            result = self.replay_team(game.read_team_grid(side), timeline,
                                      batting, fielding, accumulators)
            final_state[side] = result['final_state']
        if self.logger and self.logger.warnings:
            self.log(f'{self.logger.warnings} warning(s) in {game.id}')
        return {'accumulators': accumulators, 'final_state': final_state}
