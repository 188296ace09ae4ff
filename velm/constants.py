"""Constants and configuration for the velm editor."""

from .geometry import Color, Rgb


class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    RESERVED_ROWS = 2  # Status bar + command line below the text area
    EMPTY_ROW_MARKER = "~"  # Drawn on rows past the end of the document
    NO_NAME = "[No Name]"  # Shown in the status bar for unnamed documents

    # Command line
    COMMAND_PROMPT = ":"
    COMMAND_PLACEHOLDER = " Press : to enter a command..."

    # Normal mode
    MAX_PENDING_KEYS = 16  # Pending key input longer than this is discarded

    # Status bar colors
    STATUS_FOREGROUND = Rgb(63, 63, 63)
    STATUS_BACKGROUND = Rgb(239, 239, 239)
    EMPTY_ROW_FOREGROUND = Color.GRAY

    # Status messages
    STATUS_MESSAGE_TIMEOUT = 3.0  # Seconds before a status message is cleared
    SAVED_MESSAGE = '"{}" {}L written'
    NO_FILE_NAME_MESSAGE = "No file name"

    # Input
    INPUT_POLL_TIMEOUT = 0.1  # Seconds each blocking keyboard read may wait

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Welcome screen
    WELCOME_MESSAGE = "Velm editor -- version {}"
