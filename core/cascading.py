# core/cascading.py

"""
Cascading dropdown state (city → property → unit, unit → tenant, ...).

A resolver owns an ordered list of levels and one lookup table per
transition between adjacent levels. Each level is locked, open or selected:

    • the first level starts open with the root options
    • every other level starts locked with no options
    • selecting a value at level k opens level k+1 with
      tables[k].get(value, []) and locks everything below it

A parent value missing from its lookup table is stale data, not an error:
the child level opens with no options.

Options are only ever recomputed from the parent selection and the
lookup table, never set directly. The whole path can be exported with
to_state() and replayed with restore(), which is how a selection survives
a round trip through the browser.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from core.errors import InvalidArgument, PreconditionViolation
from core.logging_config import logger
from models.enums import LevelState
from models.selection import SelectionLevel, SelectionState


LevelRef = Union[int, str]
LookupTable = Mapping[str, Sequence[str]]


def _freeze_options(values, where: str) -> Tuple[str, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise InvalidArgument(f"{where} must be a list of strings")
    for value in values:
        if not isinstance(value, str):
            raise InvalidArgument(f"{where} must contain only strings, got {type(value).__name__}")
    return tuple(values)


def _freeze_table(table: LookupTable, position: int) -> Dict[str, Tuple[str, ...]]:
    if not isinstance(table, Mapping):
        raise InvalidArgument(f"Lookup table #{position} must be a mapping")
    frozen = {}
    for parent, children in table.items():
        if not isinstance(parent, str):
            raise InvalidArgument(f"Lookup table #{position} keys must be strings")
        frozen[parent] = _freeze_options(children, f"Lookup table #{position}['{parent}']")
    return frozen


class CascadingSelectionResolver:
    """
    State machine for one chain of dependent dropdowns.

    Args:
        levels: Ordered level names, e.g. ["city", "property", "unit"]
        tables: One lookup table per transition (len(levels) - 1 of them)
        root_options: Options for the first level. Defaults to the keys
            of the first table.
    """

    def __init__(
        self,
        levels: Sequence[str],
        tables: Sequence[LookupTable],
        root_options: Optional[Sequence[str]] = None,
    ):
        if isinstance(levels, str) or not levels:
            raise InvalidArgument("A cascade needs at least one level")
        for name in levels:
            if not isinstance(name, str) or not name:
                raise InvalidArgument("Level names must be non-empty strings")
        if len(set(levels)) != len(levels):
            raise InvalidArgument(f"Level names must be unique: {list(levels)}")
        if len(tables) != len(levels) - 1:
            raise InvalidArgument(
                f"{len(levels)} levels need {len(levels) - 1} lookup tables, got {len(tables)}"
            )

        self.levels: Tuple[str, ...] = tuple(levels)
        self._tables = tuple(_freeze_table(t, i) for i, t in enumerate(tables))

        if root_options is None:
            root_options = list(self._tables[0].keys()) if self._tables else []
        self._root_options = _freeze_options(list(root_options), "Root options")

        count = len(self.levels)
        self._states: List[LevelState] = [LevelState.locked] * count
        self._options: List[Tuple[str, ...]] = [()] * count
        self._selected: List[Optional[str]] = [None] * count

        self.clear_at(0)

    # -----------------------------------------------------
    # Level addressing
    # -----------------------------------------------------
    def index_of(self, level: LevelRef) -> int:
        """Resolve a level given by position or by name."""
        if isinstance(level, bool):
            raise InvalidArgument("Level must be an index or a level name")
        if isinstance(level, int):
            if not 0 <= level < len(self.levels):
                raise InvalidArgument(
                    f"Level index {level} out of range (0..{len(self.levels) - 1})"
                )
            return level
        if isinstance(level, str):
            if level not in self.levels:
                raise InvalidArgument(f"Unknown level '{level}', expected one of {list(self.levels)}")
            return self.levels.index(level)
        raise InvalidArgument("Level must be an index or a level name")

    def _children_of(self, k: int, value: str) -> Tuple[str, ...]:
        children = self._tables[k].get(value)
        if children is None:
            logger.debug(
                f"No '{self.levels[k + 1]}' entries for {self.levels[k]}='{value}', "
                "treating as empty"
            )
            return ()
        return children

    def _lock_below(self, k: int):
        for j in range(k + 1, len(self.levels)):
            self._states[j] = LevelState.locked
            self._options[j] = ()
            self._selected[j] = None

    # -----------------------------------------------------
    # Transitions
    # -----------------------------------------------------
    def select_at(self, level: LevelRef, value: str) -> "CascadingSelectionResolver":
        """
        Choose `value` at `level`.

        Raises PreconditionViolation if the level is locked. Choosing a new
        value on an already selected level is a change: everything below
        it is reset.
        """
        k = self.index_of(level)
        if not isinstance(value, str):
            raise InvalidArgument(f"Selected value must be a string, got {type(value).__name__}")
        if self._states[k] == LevelState.locked:
            raise PreconditionViolation(
                f"Cannot select '{self.levels[k]}' before '{self.levels[k - 1]}' is chosen"
            )

        self._states[k] = LevelState.selected
        self._selected[k] = value
        self._lock_below(k)

        if k + 1 < len(self.levels):
            self._states[k + 1] = LevelState.open
            self._options[k + 1] = self._children_of(k, value)

        return self

    def clear_at(self, level: LevelRef) -> "CascadingSelectionResolver":
        """Reset `level` and everything below it to the initial state."""
        k = self.index_of(level)

        self._selected[k] = None
        self._lock_below(k)

        if k == 0:
            self._states[0] = LevelState.open
            self._options[0] = self._root_options
        elif self._states[k - 1] == LevelState.selected:
            self._states[k] = LevelState.open
            self._options[k] = self._children_of(k - 1, self._selected[k - 1])
        else:
            self._states[k] = LevelState.locked
            self._options[k] = ()

        return self

    def reset(self) -> "CascadingSelectionResolver":
        return self.clear_at(0)

    # -----------------------------------------------------
    # Reads
    # -----------------------------------------------------
    def state_at(self, level: LevelRef) -> LevelState:
        return self._states[self.index_of(level)]

    def options_at(self, level: LevelRef) -> List[str]:
        return list(self._options[self.index_of(level)])

    def selected_at(self, level: LevelRef) -> Optional[str]:
        return self._selected[self.index_of(level)]

    def selected_values(self) -> Dict[str, Optional[str]]:
        return dict(zip(self.levels, self._selected))

    def path(self) -> List[SelectionLevel]:
        return [
            SelectionLevel(
                name=name,
                state=self._states[i],
                options=list(self._options[i]),
                selected=self._selected[i],
            )
            for i, name in enumerate(self.levels)
        ]

    # -----------------------------------------------------
    # Form validation
    # -----------------------------------------------------
    def missing_levels(self) -> List[str]:
        return [name for name, value in zip(self.levels, self._selected) if value is None]

    def is_complete(self) -> bool:
        return not self.missing_levels()

    def validation_errors(self) -> Dict[str, str]:
        """Per-level messages shown when a form is submitted incomplete."""
        return {
            name: f"Please select a {name.replace('_', ' ')} before submitting the form."
            for name in self.missing_levels()
        }

    # -----------------------------------------------------
    # Serialization
    # -----------------------------------------------------
    def to_state(self) -> SelectionState:
        return SelectionState(levels=self.path())

    def restore(self, state: Union[SelectionState, Mapping]) -> "CascadingSelectionResolver":
        """
        Replay the selections recorded in `state`.

        Options are recomputed from the lookup tables rather than trusted
        from the payload. A selection recorded below an unselected level
        raises PreconditionViolation.
        """
        if not isinstance(state, SelectionState):
            state = SelectionState.model_validate(state)

        names = [lvl.name for lvl in state.levels]
        if names != list(self.levels):
            raise InvalidArgument(f"State levels {names} do not match cascade {list(self.levels)}")

        self.reset()
        for i, lvl in enumerate(state.levels):
            if lvl.selected is not None:
                self.select_at(i, lvl.selected)
        return self
