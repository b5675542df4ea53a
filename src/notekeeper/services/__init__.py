# Re-export primary service layer entry points for convenience.
from .user import (
    signup,
    signin,
    validate_credentials,
)
from .note import (
    create_note,
    edit_note,
    delete_note,
    get_note_or_404,
    validate_note_length,
)
from .query import (
    FilterCriteria,
    ListedNote,
    parse_filters,
    select_strategy,
    list_notes,
)
from .access import (
    Decision,
    Operation,
    can_mutate,
    can_delete,
)

__all__ = [
    # user
    "signup",
    "signin",
    "validate_credentials",
    # note lifecycle
    "create_note",
    "edit_note",
    "delete_note",
    "get_note_or_404",
    "validate_note_length",
    # listing
    "FilterCriteria",
    "ListedNote",
    "parse_filters",
    "select_strategy",
    "list_notes",
    # access
    "Decision",
    "Operation",
    "can_mutate",
    "can_delete",
]
