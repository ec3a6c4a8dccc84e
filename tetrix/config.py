"""
Configuration for Tetrix.
Everything a settings screen can change lives here and is validated once,
when the config is built, so the simulation never has to re-check it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .exceptions import ConfigurationError

MIN_NEXT_PIECES = 1
MAX_NEXT_PIECES = 5

# Player actions that can be bound to a key, in settings-form order.
BINDABLE_ACTIONS = (
    "move_left",
    "move_right",
    "soft_drop",
    "hard_drop",
    "rotate_left",
    "rotate_right",
    "hold",
)

# Names used by the browser settings form.
_CAMEL_CASE_ACTIONS = {
    "moveLeft": "move_left",
    "moveRight": "move_right",
    "softDrop": "soft_drop",
    "hardDrop": "hard_drop",
    "rotateLeft": "rotate_left",
    "rotateRight": "rotate_right",
    "hold": "hold",
}


# Fields that must hold a plain int; bools are rejected even though they subclass int.
_INT_FIELDS = (
    "rows",
    "cols",
    "next_pieces_count",
    "base_gravity_interval_ms",
    "gravity_step_ms",
    "min_gravity_interval_ms",
)


def default_key_bindings() -> Dict[str, str]:
    return {
        "move_left": "ArrowLeft",
        "move_right": "ArrowRight",
        "soft_drop": "ArrowDown",
        "hard_drop": "ArrowUp",
        "rotate_left": "a",
        "rotate_right": "f",
        "hold": " ",
    }


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a Tetrix game. Immutable once validated."""
    rows: int = 20
    cols: int = 10
    next_pieces_count: int = 5
    key_bindings: Mapping[str, str] = field(default_factory=default_key_bindings)
    base_gravity_interval_ms: int = 1000
    gravity_step_ms: int = 100  # Interval shrinks by this much per level
    min_gravity_interval_ms: int = 100
    hold_once_per_piece: bool = False

    def __post_init__(self):
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.hold_once_per_piece, bool):
            raise ConfigurationError(
                f"hold_once_per_piece must be a bool, got {self.hold_once_per_piece!r}"
            )

        if not MIN_NEXT_PIECES <= self.next_pieces_count <= MAX_NEXT_PIECES:
            raise ConfigurationError(
                f"next_pieces_count must be between {MIN_NEXT_PIECES} and "
                f"{MAX_NEXT_PIECES}, got {self.next_pieces_count}"
            )
        # An I piece spawned at cols // 2 - 1 needs 5 columns.
        if self.rows < 4 or self.cols < 5:
            raise ConfigurationError(f"Board must be at least 5x4, got {self.cols}x{self.rows}")
        if self.min_gravity_interval_ms <= 0:
            raise ConfigurationError("min_gravity_interval_ms must be positive")
        if self.base_gravity_interval_ms < self.min_gravity_interval_ms:
            raise ConfigurationError("base_gravity_interval_ms is below min_gravity_interval_ms")
        if self.gravity_step_ms < 0:
            raise ConfigurationError("gravity_step_ms cannot be negative")

        if not isinstance(self.key_bindings, Mapping):
            raise ConfigurationError(
                f"key_bindings must be a mapping, got {type(self.key_bindings).__name__}"
            )
        self._validate_key_bindings()
        # Callers keep no handle on the validated table.
        object.__setattr__(self, "key_bindings", MappingProxyType(dict(self.key_bindings)))

    def _validate_key_bindings(self):
        unknown = set(self.key_bindings) - set(BINDABLE_ACTIONS)
        if unknown:
            raise ConfigurationError(f"Unknown actions in key bindings: {sorted(unknown)}")
        missing = [action for action in BINDABLE_ACTIONS if action not in self.key_bindings]
        if missing:
            raise ConfigurationError(f"No key bound for: {missing}")

        seen: Dict[str, str] = {}
        for action, key in self.key_bindings.items():
            if not isinstance(key, str) or key == "":
                raise ConfigurationError(f"Key for {action} must be a non-empty string")
            if key in seen:
                raise ConfigurationError(
                    f"Key {key!r} is bound to both {seen[key]} and {action}"
                )
            seen[key] = action

    def action_for_key(self, key: str) -> Optional[str]:
        """Returns the action name bound to a key, or None for unbound keys."""
        for action, bound_key in self.key_bindings.items():
            if bound_key == key:
                return action
        return None

    def gravity_interval_ms(self, level: int) -> int:
        """Milliseconds between gravity ticks at the given level."""
        interval = self.base_gravity_interval_ms - (level - 1) * self.gravity_step_ms
        return max(self.min_gravity_interval_ms, interval)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """
        Builds a config from plain settings data.
        Accepts camelCase keys (``nextPiecesCount``, ``keyBindings`` and
        action names like ``moveLeft``) as well as the snake_case field names.
        Bindings that are not given keep their defaults.
        """
        values = dict(data)
        if "nextPiecesCount" in values:
            values["next_pieces_count"] = values.pop("nextPiecesCount")
        if "keyBindings" in values:
            values["key_bindings"] = values.pop("keyBindings")

        # Form fields arrive as strings; anything else is checked by the constructor.
        if isinstance(values.get("next_pieces_count"), str):
            try:
                values["next_pieces_count"] = int(values["next_pieces_count"])
            except ValueError:
                raise ConfigurationError(
                    f"next_pieces_count must be an integer, got {values['next_pieces_count']!r}"
                )

        if "key_bindings" in values:
            if not isinstance(values["key_bindings"], Mapping):
                raise ConfigurationError(
                    f"key_bindings must be a mapping, got {type(values['key_bindings']).__name__}"
                )
            bindings = default_key_bindings()
            for action, key in values["key_bindings"].items():
                bindings[_CAMEL_CASE_ACTIONS.get(action, action)] = key
            values["key_bindings"] = bindings

        known = set(cls.__dataclass_fields__)
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {sorted(unknown)}")
        return cls(**values)
