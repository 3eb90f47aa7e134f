# This file defines the at-bat notation parser.
#
# A scorer enters one shorthand string per at-bat cell, for example:
#
#     'HR 4RBI'   - grand slam
#     'K PC2'     - strikeout, then a pitching change with two runners on
#     'PC0'       - pitching change before the next batter (no at-bat)
#     '1B E6'     - single, error charged to the shortstop
#     'OUT NP[5]' - out on a nice play by the third baseman
#
# Tokens are case-insensitive and combinable by whitespace. Most checks are
# plain substring checks, evaluated in a fixed order where later checks
# overwrite earlier ones. The order matters and is relied on by real input
# (TP/DP/OUT cascade, RBI digit priority), so it is kept as is.

# External imports
from collections import namedtuple
import math
import re

outcome_fields = [# Pitching
                  'batters_faced',
                  'outs_recorded',
                  'hits_allowed',
                  'home_runs_allowed',
                  'runs_allowed',     # Doubles as the batter's RBI
                  'walks_allowed',
                  'strikeouts',
                  # Hitting
                  'at_bats',
                  'total_bases',
                  # Flags
                  'nice_play_occurred',
                  'error_occurred',
                  'stolen_base',
                  'caught_stealing',
                  'double_play',      # Also set by a triple play
                  'fielders_choice_no_out',
                  # Pitching change
                  'is_pitcher_change',
                  'inherited_runners',
                  # Fielder attribution
                  'is_error',
                  'is_nice_play',
                  'fielder_position']

outcome_defaults = [0, 0, 0, 0, 0, 0, 0,
                    0, 0,
                    False, False, False, False, False, False,
                    False, 0,
                    False, False, None]

# Parsed result of a single at-bat cell.
AtBatOutcome = namedtuple('AtBatOutcome', outcome_fields, defaults=outcome_defaults)

# The all-zero outcome of an empty cell
ZERO_OUTCOME = AtBatOutcome()

# Define regex patterns for the tokens that carry a digit
pitcher_change_ptrn = re.compile(r'PC\[?([0-3])\]?')   # Ex. 'PC2' or 'PC[2]'
error_fielder_ptrn  = re.compile(r'E\[?([1-9])\]?')    # Ex. 'E6' or 'E[6]'
nice_play_ptrn      = re.compile(r'NP\[?([1-9])\]?')   # Ex. 'NP5' or 'NP[5]'

# RBI tokens in priority order (first match wins)
rbi_tokens = [('4RBI', 4), ('3RBI', 3), ('2RBI', 2), ('RBI', 1)]

# Hit tokens in check order -> (hits, home runs, total bases)
hit_tokens = [('1B', (1, 0, 1)),
              ('2B', (1, 0, 2)),
              ('3B', (1, 0, 3)),
              ('HR', (1, 1, 4))]


def is_blank(raw):
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return str(raw).strip() == ''


# Bare 'E' with no fielder. Only matched as an isolated token so that an 'E'
# inside another token never counts.
def is_legacy_error(value):
    if value == 'E':
        return True
    if len(value) >= 3:
        return (' E ' in value
                or value.startswith('E ')
                or value.endswith(' E'))
    return False


# Parses at-bat notation into an outcome.
#
# Input:
#  - raw (str): cell value, e.g. '2RBI HR', 'K', 'OUT NP5', 'PC2', '1B E6'
#
# Output:
#  AtBatOutcome
#
def parse_notation(raw):
    # Empty cell = no stats
    if is_blank(raw):
        return ZERO_OUTCOME

    value = str(raw).upper().strip()
    stats = dict(zip(outcome_fields, outcome_defaults))

    #
    # Pitcher change
    #
    # Can be standalone ('PC2') or appended to an at-bat ('K PC2').
    pc_match = pitcher_change_ptrn.search(value)
    if pc_match:
        stats['is_pitcher_change'] = True
        stats['inherited_runners'] = int(pc_match.group(1))
        # Standalone marker, not a plate appearance.
        if pitcher_change_ptrn.sub('', value, count=1).strip() == '':
            return AtBatOutcome(**stats)

    #
    # Error and nice play with fielder position
    #
    # If both are present the nice play's fielder wins.
    error_match = error_fielder_ptrn.search(value)
    if error_match:
        stats['is_error'] = True
        stats['fielder_position'] = int(error_match.group(1))
    np_match = nice_play_ptrn.search(value)
    if np_match:
        stats['is_nice_play'] = True
        stats['fielder_position'] = int(np_match.group(1))

    # Every non-empty at-bat is one batter faced
    stats['batters_faced'] = 1

    #
    # Hits
    for token, (hits, home_runs, bases) in hit_tokens:
        if token in value:
            stats['hits_allowed'] = hits
            stats['home_runs_allowed'] = home_runs
            stats['total_bases'] = bases

    #
    # Walks
    is_walk = 'BB' in value
    if is_walk:
        stats['walks_allowed'] = 1

    #
    # Strikeouts
    if 'K' in value:
        stats['strikeouts'] = 1

    #
    # Fielder's choice
    if 'FC' in value:
        if 'FC OUT' in value or 'FCOUT' in value:
            stats['outs_recorded'] = 1
        else:
            # Batter reaches, no out
            stats['fielders_choice_no_out'] = True

    #
    # Sacrifice fly / sacrifice hit
    is_sacrifice = 'SF' in value or 'SH' in value
    if is_sacrifice:
        stats['outs_recorded'] = 1

    #
    # Outs (TP > DP > single out)
    #
    # A triple play is recorded with the double play flag.
    if 'TP' in value:
        stats['outs_recorded'] = 3
        stats['double_play'] = True
    elif 'DP' in value:
        stats['outs_recorded'] = 2
        stats['double_play'] = True
    elif 'OUT' in value or stats['strikeouts'] == 1:
        if stats['outs_recorded'] == 0:
            stats['outs_recorded'] = 1

    #
    # Stolen bases / caught stealing
    if 'SB' in value:
        stats['stolen_base'] = True
    if 'CS' in value:
        stats['caught_stealing'] = True
        stats['outs_recorded'] += 1

    #
    # Runs batted in
    for token, runs in rbi_tokens:
        if token in value:
            stats['runs_allowed'] = runs
            break

    #
    # At-bats
    #
    # Walks and sacrifices are not at-bats. Hits, outs, strikeouts, fielder's
    # choices and errors are.
    stats['at_bats'] = 0 if (is_walk or is_sacrifice) else 1

    #
    # Legacy nice play / error without a fielder position
    if not stats['is_nice_play'] and 'NP' in value:
        stats['nice_play_occurred'] = True
    if not stats['is_error'] and is_legacy_error(value):
        stats['error_occurred'] = True

    return AtBatOutcome(**stats)


# Innings pitched from outs recorded, using the box score convention of
# .33 and .67 for partial innings.
def innings_pitched(outs):
    if outs < 0:
        outs = 0
    full_innings = outs // 3
    fractional = {0: 0.0, 1: 0.33, 2: 0.67}[outs % 3]
    return round(full_innings + fractional, 2)
