"""Tracing module: logs propagation steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'exclude', 'cell_solved', 'strategy_run', 'pass', 'stalled', 'solved'
    strategy: Optional[str] = None
    cell_id: Optional[int] = None
    value: Optional[int] = None
    candidates: Optional[str] = None  # remaining candidates after the step, e.g. "1 4 7"
    pass_number: Optional[int] = None
    solved_cells: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, strategy: str, cell_id: int, value: int, reason: str = ""):
        """Log a value assigned directly by a strategy."""
        self._record('assign', strategy=strategy, cell_id=cell_id, value=value, reason=reason or None)

    def log_exclusion(self, strategy: str, cell_id: int, removed: Iterable[int], remaining: Iterable[int]):
        """Log candidates removed from a cell."""
        self._record(
            'exclude',
            strategy=strategy,
            cell_id=cell_id,
            candidates=" ".join(str(v) for v in sorted(remaining)),
            reason=f"Removed {' '.join(str(v) for v in sorted(removed))}",
        )

    def log_cell_solved(self, strategy: str, cell_id: int, value: int):
        """Log a cell that collapsed to its last candidate."""
        self._record('cell_solved', strategy=strategy, cell_id=cell_id, value=value)

    def log_strategy_run(self, strategy: str, iterations: int, solved_cells: int):
        """Log a strategy reaching its local fixed point."""
        self._record(
            'strategy_run',
            strategy=strategy,
            solved_cells=solved_cells,
            reason=f"Local fixed point after {iterations} iterations",
        )

    def log_pass(self, pass_number: int, solved_cells: int):
        """Log the end of an outer solver pass."""
        self._record('pass', pass_number=pass_number, solved_cells=solved_cells)

    def log_stalled(self, pass_number: int, solved_cells: int, reason: str = "No progress during a full pass"):
        """Log the solver stopping without a full solution."""
        self._record('stalled', pass_number=pass_number, solved_cells=solved_cells, reason=reason)

    def log_solved(self, pass_number: int, solved_cells: int):
        """Log when the grid is fully solved."""
        self._record('solved', pass_number=pass_number, solved_cells=solved_cells)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'strategy', 'cell_id', 'value',
            'candidates', 'pass_number', 'solved_cells', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_cells_solved_by_exclusion': action_counts.get('cell_solved', 0),
            'num_passes': action_counts.get('pass', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
