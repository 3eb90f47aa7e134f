# This file defines the exceptions raised at the engine's API boundary.
#
# Per-cell problems (unknown notation, a fielder position nobody plays, a
# batting order row with no player) are never raised. Only inputs that break
# the caller's contract are.

class BoxScoreError(Exception):
    pass
