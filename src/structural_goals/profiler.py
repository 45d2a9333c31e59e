# MIT License (see LICENSE)
"""
Phase timing for the particle system.

A Profiler handed to ParticleSystem records how long each iteration spends
in the calculate pass (all goals) and in the merge pass. After run() the
system logs the per-phase totals at debug level; reset() on the system
clears them along with the positions.

Example:
    profiler = Profiler()
    system = ParticleSystem(profiler=profiler)
    ...
    system.run()
    print(profiler.summary()["merge"]["mean_ms"])
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
import time
from typing import Iterator


@dataclass
class PhaseTimes:
    """Wall-clock samples (seconds) of one phase, one per iteration."""
    samples: list[float] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def total_ms(self) -> float:
        return 1e3 * sum(self.samples)

    def as_dict(self) -> dict[str, float]:
        n = self.count
        return {
            "n": n,
            "mean_ms": self.total_ms / n if n else 0.0,
            "max_ms": 1e3 * max(self.samples, default=0.0),
            "total_ms": self.total_ms,
        }


class Profiler:
    """
    Records per-phase timings of ParticleSystem.step().

    Phases appear in summary() in the order they were first timed.
    """

    def __init__(self) -> None:
        self.phases: dict[str, PhaseTimes] = {}

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block as one sample of phase `name`.

        The sample is recorded even if the block raises.
        """
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.phases.setdefault(name, PhaseTimes()).samples.append(time.perf_counter() - t0)

    def summary(self) -> dict[str, dict[str, float]]:
        """Phase name -> {'n', 'mean_ms', 'max_ms', 'total_ms'}."""
        return {name: times.as_dict() for name, times in self.phases.items()}

    def reset(self) -> None:
        self.phases.clear()

    def log_summary(self, log: logging.Logger, level: int = logging.DEBUG) -> None:
        """Emit one line per phase on `log`."""
        for name, s in self.summary().items():
            log.log(
                level, "Phase %s: %d samples, mean %.3f ms, max %.3f ms, total %.3f ms",
                name, s["n"], s["mean_ms"], s["max_ms"], s["total_ms"],
            )
