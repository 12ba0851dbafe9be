STATE_DIR_NAME = ".kanban"
CONFIG_FILE = "config.yaml"
STORAGE_DIR_NAME = "storage"
LOCK_FILE = ".lock"

# Key of the single persisted blob. Changing it orphans previously stored boards.
STORAGE_KEY = "trello_project_board_v1"

PLACEHOLDER_TITLE = "Untitled"
DEFAULT_LIST_TITLE = "New list"
DEFAULT_CARD_TITLE = "New card"

DIRECTION_LEFT = "left"
DIRECTION_RIGHT = "right"

DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

WINDOWS_LOCK_BYTES = 4096

# (title, [(card title, description), ...])
SEED_LAYOUT = (
    (
        "To Do",
        (
            ("Draft project README", "Outline features and usage"),
            ("Sketch UI", "Wireframe lists and cards"),
        ),
    ),
    (
        "In Progress",
        (
            ("Implement drag & drop", ""),
            ("Add persistence", "Use localStorage"),
        ),
    ),
    (
        "Done",
        (
            ("Initial scaffold", ""),
        ),
    ),
)
