"""Constants and configuration for the airliner editing commands."""

class AirlinerConstants:
    """Central configuration constants for the editing commands."""

    # Kill accrual
    ACCRUE_WINDOW_MS = 2500  # Consecutive kills within this window share one clipboard entry
    MIN_ACCRUE_WINDOW_MS = 100
    MAX_ACCRUE_WINDOW_MS = 60000

    # Line endings
    LINE_TERMINATORS = ("\r\n", "\r", "\n")  # Longest first for matching
    LINE_TERMINATOR_CHARS = "\r\n"
    MAX_TERMINATOR_CHARS = 2  # A kill at end of line consumes at most "\r\n"

    # Settings
    SETTINGS_APP_NAME = "airliner"
    SETTINGS_FILENAME = "settings.json"

    # Command names
    HUNGRY_BACKSPACE = "hungry-backspace"
    CUT_TO_EOL = "cut-to-eol"
