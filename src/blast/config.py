"""Board configuration.

Everything here is fixed once the board is built. ``BoardConfig`` validates
itself on construction so a malformed setup never reaches the controller.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Tuple

from blast import constants
from blast.errors import BoardConfigError


@dataclass(frozen=True, slots=True)
class PhaseTimings:
    """Settle delays (seconds) between board phases plus presentation hints."""

    remove_duration: float = constants.REMOVE_DURATION
    drop_wait_duration: float = constants.DROP_WAIT_DURATION
    refill_wait_duration: float = constants.REFILL_WAIT_DURATION
    evaluate_settle_duration: float = constants.EVALUATE_SETTLE_DURATION
    recreate_wait_duration: float = constants.RECREATE_WAIT_DURATION
    drop_speed: float = constants.DROP_SPEED
    creation_duration: float = constants.CREATION_DURATION

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise BoardConfigError(errors)

    def validate(self) -> List[str]:
        errors: List[str] = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                errors.append(f"{f.name} must be a number, got {value!r}")
            elif value < 0:
                errors.append(f"{f.name} must not be negative, got {value}")
        if not errors and self.drop_speed <= 0:
            errors.append(f"drop_speed must be positive, got {self.drop_speed}")
        return errors

    @classmethod
    def instant(cls) -> "PhaseTimings":
        """Timings with every phase delay at zero."""
        return cls(
            remove_duration=0.0,
            drop_wait_duration=0.0,
            refill_wait_duration=0.0,
            evaluate_settle_duration=0.0,
            recreate_wait_duration=0.0,
        )


@dataclass(frozen=True, slots=True)
class BoardConfig:
    rows: int = constants.GRID_ROWS
    cols: int = constants.GRID_COLS
    color_count: int = constants.COLOR_COUNT
    threshold_a: int = constants.THRESHOLD_A
    threshold_b: int = constants.THRESHOLD_B
    threshold_c: int = constants.THRESHOLD_C
    timings: PhaseTimings = field(default_factory=PhaseTimings)
    min_run: int = field(default=constants.MIN_RUN, init=False)

    def __post_init__(self) -> None:
        errors = self.validate()
        if errors:
            raise BoardConfigError(errors)

    def validate(self) -> List[str]:
        errors: List[str] = []
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if not _is_int(value) or not constants.MIN_GRID_SIZE <= value <= constants.MAX_GRID_SIZE:
                errors.append(
                    f"{name} must be an integer in "
                    f"[{constants.MIN_GRID_SIZE}, {constants.MAX_GRID_SIZE}], got {value!r}"
                )
        if not _is_int(self.color_count) or not (
            constants.MIN_COLOR_COUNT <= self.color_count <= constants.MAX_COLOR_COUNT
        ):
            errors.append(
                f"color_count must be an integer in "
                f"[{constants.MIN_COLOR_COUNT}, {constants.MAX_COLOR_COUNT}], got {self.color_count!r}"
            )
        thresholds = self.thresholds
        if not all(_is_int(value) and value > 0 for value in thresholds):
            errors.append(f"tier thresholds must be positive integers, got {thresholds!r}")
        elif not thresholds[0] < thresholds[1] < thresholds[2]:
            errors.append(f"tier thresholds must be strictly increasing, got {thresholds!r}")
        if not isinstance(self.timings, PhaseTimings):
            errors.append(f"timings must be PhaseTimings, got {type(self.timings).__name__}")
        return errors

    @property
    def thresholds(self) -> Tuple[int, int, int]:
        return (self.threshold_a, self.threshold_b, self.threshold_c)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BoardConfig":
        """Build a config from plain data, e.g. a parsed settings file.

        ``timings`` may be a nested mapping. Unknown keys are rejected.
        """
        allowed = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise BoardConfigError([f"unknown configuration key {key!r}" for key in unknown])
        values = dict(data)
        timings = values.get("timings")
        if isinstance(timings, Mapping):
            timing_names = {f.name for f in fields(PhaseTimings)}
            unknown = sorted(set(timings) - timing_names)
            if unknown:
                raise BoardConfigError([f"unknown timing key {key!r}" for key in unknown])
            values["timings"] = PhaseTimings(**timings)
        return cls(**values)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
