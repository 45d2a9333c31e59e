import logging
import os

from structural_goals.io import load_model, save_results

logging.basicConfig(level=logging.INFO)

here = os.path.dirname(os.path.abspath(__file__))
system = load_model(os.path.join(here, "tripod.json"))
system.run()

results = system.bar_results()
for r in results:
    print(r.start_index, r.end_index, f"{r.axial_force:.3f} kN")

save_results(results, os.path.join(here, "tripod_forces.json"))
