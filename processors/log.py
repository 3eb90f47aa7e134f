# This file defines the game log written while replaying a box score.
#
# One log file per game. Lines are appended as the replay goes, so a log
# left behind by a failed replay still shows the last cell read.

from pathlib import Path

class Logger:
    def __init__(self, filename):
        self.path = Path(filename)
        # Start each game from an empty log
        self.path.parent.mkdir(exist_ok=True, parents=True)
        self.path.write_text('')
        self.warnings = 0

    def log(self, message=''):
        with self.path.open('a') as stream:
            stream.write(str(message) + '\n')

    # Stats that could not be attributed (missing batter, fielder or pitcher)
    def warning(self, message):
        self.warnings += 1
        self.log(f'WARNING: {message}')

    # Section header, ex. one per half of the game
    def divider(self, title=''):
        self.log('-' * 51)
        if title:
            self.log(title)
