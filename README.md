# democollection

Building blocks for small 3D rendering demos. The package is plain Python
and has no third-party dependencies.

## Modules

- `democollection.linalg` has `Vector` and `Matrix` types. Matrices are
  indexed as `m[x, y]`, where `x` is the column and `y` is the row. The
  module also has `dot`, `cross`, `length`, `normalized`, `identity`,
  `determinant`, `inverse` and `transpose`. It builds scaling, rotation,
  translation and camera matrices (`rotation3x3`, `translation4x4`,
  `rotation_camera4x4` and others), projections (`perspective_fov`,
  `orthographic`) and view matrices (`look_to`, `look_at`). `transform`
  applies a 4x4 matrix to a 3D point.
- `democollection.position` has `Position`, which holds `position`,
  `rotation` (pitch, yaw, roll) and `scale` vectors. It can move, turn,
  roll and scale, and it builds world matrices and their inverses.
- `democollection.camera` has `Camera`, a `Position` with a perspective
  projection. The projection is rebuilt by `update_screen_resolution`,
  `update_fov` and `update_screen_depth`. `camera_matrix()` returns the
  projection multiplied by `view()`.
- `democollection.orbitcontroller` has `OrbitController`, which keeps a
  target `Position` on a sphere around a centre point:
  - dragging with `MouseButton.LEFT` held rotates the target;
  - dragging with `MouseButton.RIGHT` held pans the centre;
  - `scroll` zooms in or out.

  Button events are passed as `ButtonAction.PRESS` or `ButtonAction.RELEASE`.
- `democollection.common` has these helpers:
  - `get_folder_name` returns the part of a path up to its last `/` or `\`;
  - `save_program_folder` and `get_program_folder` remember a program folder;
  - `read_file` returns a file's bytes, or `b""` when the file cannot be opened.
- `democollection.image` has `Image`, a width by height grid of `Color`
  values (RGBA, each component 0..255).
- `democollection.modeltypes` has the `Vertex`, `Bone`, `ModelBufferFs`,
  `MaterialData` and `ModelData` dataclasses.
- `democollection.pmxloader` reads PMX 2.0 files. `load_pmx(filename,
  model_data=None)` returns a `ModelData` filled with:
  - vertices with up to four bone weights;
  - indices;
  - materials, each with its texture path resolved against the file's folder;
  - a skeleton.

  On failure it raises `PmxError`, and the error's `status` is a `PmxStatus`.
- `democollection.modelloader` has `ModelLoader`:
  - `make_cube`, `make_plain` and `make_uv_sphere` build geometry;
  - `load_pmx` loads a PMX file;
  - `transform` applies a 4x4 matrix to the positions and the normals;
  - `vertices()`, `indices()`, `materials()` and `skeleton()` return the model's parts.

## Installation

```
pip install .
```

## Example

```python
from democollection.camera import Camera
from democollection.linalg import Vector
from democollection.modelloader import ModelLoader
from democollection.orbitcontroller import ButtonAction, MouseButton, OrbitController

camera = Camera()
camera.update_screen_resolution(1280, 800)

controller = OrbitController(camera)
controller.set_center(Vector(0.0, -10.0, 0.0))
controller.set_distance(27.0)
controller.mouse_button(MouseButton.LEFT, ButtonAction.PRESS)
controller.mouse_move(10.0, 5.0)

loader = ModelLoader()
loader.make_cube(Vector(-1.0, -1.0, -1.0), Vector(1.0, 1.0, 1.0))
print(len(loader.vertices()), len(loader.indices()))  # 24 36

matrix = camera.camera_matrix()
```

## What it does not do

The package has no window, no GPU rendering, no texture or image file
decoding and no command-line program. It produces the matrices, meshes and
model data that a renderer would use, but it draws nothing itself. The PMX
reader stops after the bones: it does not read morphs, display frames,
rigid bodies or joints.

## Running the tests

```
pip install .[test]
pytest
```