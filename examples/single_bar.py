from structural_goals.goals import BarGoal
from structural_goals.unpack import unpack_bar_output
import numpy as np

# 1000 mm steel rod, 100 mm², pulled 10 mm longer than built
bar = BarGoal(((0.0, 0.0, 0.0), (1000.0, 0.0, 0.0)), e_modulus=200000.0, area=100.0)
bar.bind([0, 1])

positions = np.array([[0.0, 0.0, 0.0], [1010.0, 0.0, 0.0]])
step = bar.calculate(positions)

print("extension:", step.extension, "moves:", step.move.tolist())
print(unpack_bar_output(step.output(positions)))
