# This file defines the player object

# External imports
import re

class Player:

    positions = { 1: 'P',
                  2: 'C',
                  3: '1B',
                  4: '2B',
                  5: '3B',
                  6: 'SS',
                  7: 'LF',
                  8: 'CF',
                  9: 'RF'}

    # Pitcher notations written into the position history
    starter_ptrn  = re.compile(r'^SP$')
    reliever_ptrn = re.compile(r'^RP(\d+)$')

    # Position trail delimiter used by score sheets, ex. '2B / RP2 / LF'
    delimiter = '/'

    def __init__(self, name, batting_order=None, positions=None, team_id=None):
        # Basic info
        # Names are only unique within a team, so the id carries the team.
        self.id = (team_id, name)
        self.team_id = team_id
        self.name = name
        self.batting_order = batting_order # zero-indexed, None if not in the lineup
        # Ordered position history, most recent position last
        self.position_history = []
        for pos in Player.parse_position_history(positions):
            self.append_position(pos)

    # Converts a position trail into an ordered list of position tokens.
    #
    # Input:
    #  - value (str or list): ex. 'SS', '2B / P / SS' or ['2B', 'RP2']
    #
    # Output:
    #  list of position tokens (upper case, stripped)
    @staticmethod
    def parse_position_history(value):
        if value is None:
            return []
        if isinstance(value, str):
            tokens = value.split(Player.delimiter)
        else:
            tokens = list(value)
        return [str(t).strip().upper() for t in tokens if str(t).strip()]

    @property
    def position(self):
        return self.position_history[-1] if self.position_history else ''

    # Adds a position to the history unless the player is already there
    # (avoids 'P / P').
    def append_position(self, position):
        position = str(position).strip().upper()
        if not position or position == self.position:
            return False
        self.position_history.append(position)
        return True

    # Replaces the position trail outright (ex. 'P' -> 'SP').
    def set_positions(self, positions):
        self.position_history = []
        for pos in Player.parse_position_history(positions):
            self.append_position(pos)

    # Fielding position number (1-9) of the player's current position.
    # Starting and relief pitcher notations count as the pitcher.
    @property
    def position_number(self):
        pos = self.position
        if Player.is_pitcher_notation(pos):
            return 1
        for number, name in Player.positions.items():
            if name == pos:
                return number
        return None

    @staticmethod
    def is_pitcher_notation(position):
        return (position == 'P'
                or bool(Player.starter_ptrn.match(position))
                or bool(Player.reliever_ptrn.match(position)))

    @staticmethod
    def reliever_number(position):
        match = Player.reliever_ptrn.match(position)
        return int(match.group(1)) if match else None

    # True if the player has been on the mound at any point in the game
    def has_pitched(self):
        return any(Player.is_pitcher_notation(pos) for pos in self.position_history)

    def position_trail(self):
        return f' {Player.delimiter} '.join(self.position_history)

    def __repr__(self):
        return f'Player({self.name!r}, batting_order={self.batting_order!r}, positions={self.position_trail()!r})'
