from __future__ import annotations

from shiftplan.result_types import PlacementEvent


class PlacementCallback:
    """Base class for objects that want to hear about each placed shift."""

    def on_placement(self, event: PlacementEvent) -> None:
        return


class MinimalProgress(PlacementCallback):
    """
    A progress callback that logs every `log_every` placements and keeps the
    full placement history for plotting.
    """

    def __init__(self, log_every: int = 5):
        self.log_every = max(1, int(log_every))
        self.placements = 0
        self._score_field_width = 0
        self.history: list[tuple[int, int, int]] = []

        self.has_performed_initial_print = False

    def on_placement(self, event: PlacementEvent) -> None:
        if not self.has_performed_initial_print:
            print_msg = (
                "\nscore: staff-hours of shortage the placed shift absorbed\n"
                "left: staff-hours of shortage still uncovered\n"
            )
            print(print_msg)
            self.has_performed_initial_print = True
        self.placements += 1
        self.history.append((event.iteration, event.score, event.remaining_deficit))

        if self.placements == 1 or self.placements % self.log_every == 0:
            score_str = f"{event.score:,}"
            self._score_field_width = max(self._score_field_width, len(score_str))
            score_field = score_str.ljust(self._score_field_width)
            print(
                f"[{event.iteration:4d}] {event.shift_type.value} "
                f"{event.start:02d}-{event.end:02d} | score={score_field} | "
                f"left={event.remaining_deficit:<6,} | placed={self.placements:<5}",
                flush=True,
            )

    def placement_history(self) -> list[tuple[int, int, int]]:
        """Return collected (iteration, score, remaining_deficit) tuples."""
        return list(self.history)
