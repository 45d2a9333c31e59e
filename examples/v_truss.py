from structural_goals.solver import ParticleSystem
from structural_goals.goals import BarGoal, AnchorGoal, LoadGoal
from structural_goals.unpack import unpack_bar_output

system = ParticleSystem()

apex = (1000.0, -1000.0, 0.0)
system.add_goal(BarGoal(((0.0, 0.0, 0.0), apex), e_modulus=210000.0, area=200.0))
system.add_goal(BarGoal(((2000.0, 0.0, 0.0), apex), e_modulus=210000.0, area=200.0, pretension=2.0))
system.add_goal(AnchorGoal((0.0, 0.0, 0.0)))
system.add_goal(AnchorGoal((2000.0, 0.0, 0.0)))
system.add_goal(LoadGoal(apex, force=(0.0, -15.0, 0.0)))

report = system.run()
print("converged:", report.converged, "iterations:", report.iterations)

for result in system.bar_results():
    out = unpack_bar_output(result)
    print(f"bar {out.start_index}-{out.end_index}: N = {out.axial_force} kN, sigma = {out.axial_stress} MPa")
