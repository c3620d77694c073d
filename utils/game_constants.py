"""Gameplay-related constants shared across services."""

CLASSES: list[str] = ["Forest", "Sword", "Rune", "Dragon", "Abyss", "Haven", "Portal"]
ALL_CLASSES_LABEL = "All"

TURN_FIRST = "1st"
TURN_SECOND = "2nd"
TURNS: list[str] = [TURN_FIRST, TURN_SECOND]

RESULT_WIN = "Win"
RESULT_LOSS = "Loss"
RESULTS: list[str] = [RESULT_WIN, RESULT_LOSS]

MODE_NORMAL = "normal"
MODE_TAKE_TWO = "takeTwo"
MODES: list[str] = [MODE_NORMAL, MODE_TAKE_TWO]

# A Take Two run ends on whichever cap is reached first.
MAX_RUN_WINS = 7
MAX_RUN_LOSSES = 2

ITEMS_PER_PAGE = 20

CHART_TYPES = ["pie", "bar", "histogram"]

__all__ = [
    "CLASSES",
    "ALL_CLASSES_LABEL",
    "TURN_FIRST",
    "TURN_SECOND",
    "TURNS",
    "RESULT_WIN",
    "RESULT_LOSS",
    "RESULTS",
    "MODE_NORMAL",
    "MODE_TAKE_TWO",
    "MODES",
    "MAX_RUN_WINS",
    "MAX_RUN_LOSSES",
    "ITEMS_PER_PAGE",
    "CHART_TYPES",
]
