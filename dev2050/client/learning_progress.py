from typing import Any, Dict, Iterable, Set


class LearningPathProgress:
    """
    Tracks which steps of a learning path the user has ticked off in the
    current session. Nothing is persisted.
    """

    def __init__(self, steps: Iterable[Any]):
        self._hours: Dict[str, int] = {}
        for step in steps:
            step_id = str(_field(step, "id"))
            self._hours[step_id] = int(_field(step, "estimated_hours") or 0)
        self._completed: Set[str] = set()

    @property
    def total_steps(self) -> int:
        return len(self._hours)

    @property
    def completed(self) -> Set[str]:
        return set(self._completed)

    def toggle(self, step_id: Any) -> bool:
        """Flip a step between done and not done. Returns the new state."""
        key = str(step_id)
        if key not in self._hours:
            raise KeyError(f"Unknown step: {step_id}")
        if key in self._completed:
            self._completed.discard(key)
            return False
        self._completed.add(key)
        return True

    def is_completed(self, step_id: Any) -> bool:
        return str(step_id) in self._completed

    @property
    def percent(self) -> float:
        if not self._hours:
            return 0.0
        return len(self._completed) / len(self._hours) * 100

    @property
    def completed_hours(self) -> int:
        return sum(self._hours[key] for key in self._completed)

    @property
    def remaining_hours(self) -> int:
        return sum(self._hours.values()) - self.completed_hours


def _field(step: Any, name: str) -> Any:
    if isinstance(step, dict):
        return step.get(name)
    return getattr(step, name)
