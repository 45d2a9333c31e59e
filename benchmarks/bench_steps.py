"""
Microbenchmark: time per iteration vs number of bars.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from structural_goals.solver import ParticleSystem
from structural_goals.goals import BarGoal, AnchorGoal, LoadGoal
from structural_goals.profiler import Profiler


def run(n: int, steps: int = 300):
    prof = Profiler()
    system = ParticleSystem(max_iterations=steps, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # cable of n bars between two supports, jittered node loads
    seg = 100.0
    pts = [(seg * i, 0.0, 0.0) for i in range(n + 1)]
    for a, b in zip(pts[:-1], pts[1:]):
        system.add_goal(BarGoal((a, b), e_modulus=210000.0, area=50.0, pretension=1.0))
    system.add_goal(AnchorGoal(pts[0]))
    system.add_goal(AnchorGoal(pts[-1]))
    for p in pts[1:-1]:
        system.add_goal(LoadGoal(p, force=(0.0, 0.0, -0.1 - 0.01 * float(rng.random()))))

    # warmup, then drop its timings
    for _ in range(10):
        system.step()
    prof.reset()

    t0 = time.perf_counter()
    for _ in range(steps):
        system.step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.summary()


if __name__ == "__main__":
    for n in [10, 50, 100, 250, 500]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["calculate", "merge"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
