"""Podium and tower — two masses stacked with the top plane.

A wide D-shaped podium with a courtyard, then an I-shaped tower standing
on the podium's top plane.

   tower (I, 24 x 18)
        ┌──┐
        │  │
   ┌────┴──┴────┐
   │  podium (D) │
   └─────────────┘
"""

from pathlib import Path

from massing_builder.export.ifc import export_ifc
from massing_builder.export.plan import render_footprint
from massing_builder.generators.mass import generate_mass
from massing_builder.models import Plane

FLOOR_HEIGHT = 3.5

# --- Podium ---
podium = generate_mass(
    "D", Plane.world_xy(), length=60.0, width=48.0, depth=12.0,
    target_area=6000.0, floor_height=FLOOR_HEIGHT,
)

# --- Tower on top of the podium ---
tower = generate_mass(
    "I", podium.top_plane, length=24.0, width=18.0, depth=6.0,
    target_area=8000.0, floor_height=FLOOR_HEIGHT,
)

# --- Export ---
output = Path(__file__).parent / "output"
output.mkdir(exist_ok=True)

for name, mass in [("podium", podium), ("tower", tower)]:
    ifc_path = export_ifc(mass, output / f"{name}.ifc", name=name.title())
    png_path = render_footprint(mass.floors[0], output / f"{name}.png", title=name.title())
    print(f"📁 {name}: {ifc_path.name}, {png_path.name}")
    print(f"   Floors: {mass.floor_count}")
    print(f"   Floor area: {mass.total_floor_area:.1f} m²")
    print(f"   Volume: {mass.total_volume:.1f} m³")

print(f"   Total height: {tower.top_plane.origin.z:.1f} m")
