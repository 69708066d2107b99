from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# PERMISSION QUERY MODE
# -----------------------------------------------------
class PermissionMode(BaseStrEnum):
    """How a list of permission names is evaluated."""

    single = "single"
    any = "any"
    all = "all"


# -----------------------------------------------------
# SELECTION LEVEL STATE
# -----------------------------------------------------
class LevelState(BaseStrEnum):
    """State of one rung in a cascading dropdown."""

    locked = "locked"      # parent not chosen yet; dropdown disabled
    open = "open"          # parent chosen; options available
    selected = "selected"  # a value has been picked


# -----------------------------------------------------
# SELECTION ACTION
# -----------------------------------------------------
class SelectionActionType(BaseStrEnum):
    """Change applied to a cascading selection."""

    select = "select"
    clear = "clear"
