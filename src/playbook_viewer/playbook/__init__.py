"""Play content: wire models, HTTP client and SQLite store.

Public API
----------
PlayContent        - a play's players and drawings
Drawing            - one authored path (control-point pool + segments)
PlayContentClient  - fetches play content from the plays API
PlayStorage        - SQLite persistence
PlayFetchError     - base of the client's error types
"""

from playbook_viewer.playbook.client import (
    ForbiddenError,
    PlayContentClient,
    PlayFetchError,
    PlayNotFoundError,
    UnauthorizedError,
)
from playbook_viewer.playbook.models import (
    ControlPoint,
    Drawing,
    DrawingStyle,
    PathSegment,
    PlayContent,
    Player,
    PreSnapMotion,
)
from playbook_viewer.playbook.storage import PlayStorage

__all__ = [
    "ControlPoint",
    "Drawing",
    "DrawingStyle",
    "ForbiddenError",
    "PathSegment",
    "PlayContent",
    "PlayContentClient",
    "PlayFetchError",
    "PlayNotFoundError",
    "PlayStorage",
    "Player",
    "PreSnapMotion",
    "UnauthorizedError",
]
