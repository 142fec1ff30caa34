# terrainwalk

Building blocks for walking across a heightmap terrain in first person. The package covers
terrain, models, the camera, lights and input state. It does no drawing of its own.

## Modules

- `terrainwalk.geometry`
  - `Vertex` is a dataclass with `position`, `normal` and `tex_coord`. Each is stored as a
    tuple of floats, and a value with the wrong number of components raises `ValueError`.
  - 4×4 matrix helpers in column-vector convention: `translate(offset)`,
    `rotate(angle, axis)` (angle in radians), `scale_matrix(factors)`,
    `look_at(eye, center, up)` and `perspective(fovy, aspect, near, far)`.
  - `normalize(vector)` raises `ValueError` for a zero-length vector.
- `terrainwalk.objloader`
  - `load_obj(path)` and `parse_obj(lines, source)` read Wavefront OBJ text. They take
    `v`, `vt` and `vn` lines and faces written as `f v/vt/vn ...`. Faces are
    fan-triangulated, and the result is an `ObjData` holding one vertex, uv and normal per
    triangle corner.
  - A file that cannot be opened, a face corner without all three indices, or an index out
    of range raises `ObjError`.
  - Faces with fewer than three corners are skipped with a logged warning.
- `terrainwalk.camera`
  - `Camera(position)` has yaw and pitch in degrees. `process_mouse_movement` limits pitch
    to ±89° by default.
  - `process_keyboard(pressed_keys, delta_time)` takes a collection of `Key` values:
    - `W`, `S`, `A` and `D` move.
    - `LEFT_SHIFT` multiplies the speed by 2.5.
    - `SPACE` starts a jump while the camera is on the ground.
    - It returns the frame's displacement.
  - `move(direction, heightmap, speed, max_height, delta_time)` applies the displacement
    and gravity. It keeps the camera 0.5 above the bilinearly sampled terrain height.
  - `view_matrix()` returns the camera's view matrix.
- `terrainwalk.mesh`
  - `Mesh` holds a `Primitive` (`POINT`, `LINES`, `TRIANGLES`), vertices, indices, origin,
    orientation, a `texture_id` and material colours.
  - `clear()` empties it back to a point mesh.
- `terrainwalk.model`
  - `Model` groups meshes with `origin`, `orientation` (radians), `scale`, a
    `local_model_matrix` and a `transparent` flag.
  - `Model.from_obj(path)` builds a one-mesh triangle model named after the file stem. An
    empty path gives an empty model.
  - `model_matrix()` returns `local * scale * Rz * Ry * Rx * translate(origin)`.
  - `update(delta_t)` advances `orientation` by `angular_velocity * delta_t`.
- `terrainwalk.config`
  - `load_config(path="config.json")` reads the JSON settings. If the file is missing it
    first writes the defaults with `create_default_config`. If the file is unreadable or is
    not valid JSON, it returns `default_config()`.
  - `validate_antialiasing_settings(config)` returns an `AntialiasingSettings(enabled,
    samples, valid)`. When antialiasing is enabled, samples of 1 or less become 4 and
    samples above 8 become 8. In both cases `valid` is set to `False`.
- `terrainwalk.terrain`
  - `load_heightmap(path)` loads any image Pillow can read as an 8-bit grayscale array. It
    raises `HeightmapError` on failure.
  - `default_heightmap()` is a flat 15×15 map of value 128.
  - `sample_height(heightmap, x, y)` clamps to the map edges.
  - `highest_point(heightmap)` returns `(value, x, z)`.
  - `height_at(heightmap, row, col, max_height)` returns the scaled world height.
  - `build_terrain_mesh(heightmap, max_height, tile_size)` builds a triangle grid with
    smooth per-vertex normals.
- `terrainwalk.scene`
  - `Scene(heightmap=None, resources="resources")` holds:
    - the heightmap; if none is given it is loaded from
      `resources/textures/heightmap.png`, falling back to the default map;
    - a `Camera`;
    - a directional light, three point lights and a spotlight, all `Light` records;
    - window size, field of view and input state.
  - `load_models()`:
    - builds the terrain;
    - loads three transparent models (`models/tree.obj`, `models/bunny_tri_vnt.obj`,
      `models/house.obj`);
    - loads three opaque ones (`models/cube.obj`, `models/cat.obj`,
      `models/Tractor.obj`);
    - reads all of them under the resources directory and sets each one's position on the
      terrain.

    Texture files are only checked for readability. A model's `texture_id` is its 1-based
    position in `Scene.textures`, or 0 when the image could not be read. A missing model
    file raises `ObjError`.
  - `update_lights(current_time)` animates the lights and returns a dict of shader uniform
    names to values.
  - `transparent_draw_order()` sorts the transparent models from farthest to nearest the
    camera.
  - Zoom:
    - `scroll(yoffset)` changes the field of view in 5° steps, kept within 20–170°.
    - `reset_zoom()` restores 60°.
    - `set_framebuffer_size(width, height)` records the size.
    - `projection_matrix()` gives the matching perspective matrix.
  - Input:
    - `cursor_moved(xpos, ypos)` turns the camera.
    - `release_cursor()` frees the cursor.
    - `press_key(name)` handles the keys in the table below. Other names are ignored.

      | Key | Effect |
      | --- | --- |
      | `escape` | sets `should_close` |
      | `f10` | toggles `vsync` |
      | `f11` | toggles `fullscreen` |
      | `r`, `g`, `b` | adds 0.1 to the colour component, wrapping back to 0 |
      | `h` | toggles `show_info` and cursor capture |

  - `step(pressed_keys, delta_time)` moves the camera one frame over the terrain and
    returns its position.

## Install

```
pip install .
```

## Example

```python
from terrainwalk.camera import Camera, Key
from terrainwalk.terrain import default_heightmap

heightmap = default_heightmap()
camera = Camera((5.0, 10.0, 5.0))

for _ in range(60):
    step = camera.process_keyboard({Key.W}, 1 / 60)
    camera.move(step, heightmap, 1.0, 20.0, 1 / 60)

print(camera.position, camera.view_matrix())
```

Loading a model:

```python
from terrainwalk.model import Model

bunny = Model.from_obj("resources/models/bunny_tri_vnt.obj")
print(bunny.name, len(bunny.meshes[0].vertices))
print(bunny.model_matrix())
```

## What it does not do

The package has no renderer and no command to run. It does none of the following:

- open a window;
- compile shaders;
- upload textures or meshes to a graphics card;
- draw an on-screen overlay.

Texture ids are bookkeeping numbers only. `Scene.update_lights` returns uniform values but
does not send them anywhere. Drawing the scene is left to the caller.

## Tests

```
pip install .[test]
pytest
```