# skygame

The engine-side systems of a small side-scrolling game, as a plain Python
library. It produces the data a renderer needs: vertex layouts, meshes,
transforms and shader file names. It also handles configuration, asset
loading, keyboard input and live editing of values.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Modules

- `skygame.reflect` describes types and their members at runtime. Register a
  class with `reflect_type(Member(kind, attr, name), ...)`, which works as a
  decorator or as a call. Then build its description with
  `get_reflection(kind)`. `kind` may be a class, a `Pointer(cls)` for an owned
  object, or an array tuple. The result is a `Reflect` tree. It matches
  property names without regard to case (`get_property`) and sets values with
  type checks (`set_int`, `set_float`, `set_bool`). `BasicType` and
  `basictype_to_name` give the category of each node.
- `skygame.persist` builds objects from JSON through their reflection data:
  - `persist_create_from_config(cls, path)` creates a new `cls` from a file.
  - `persist_create_from_json_reflect(path, reflect)` does the same from a
    `Reflect` you supply.
  - `persist_load_json(text, reflect)` reads JSON from a string.

  Unknown properties, a value of the wrong type or malformed JSON raise
  `PersistError`. An object that defines `persist_finish_loaded()` has that
  method called once its JSON object has been read.
- `skygame.obj_load` is a minimal Wavefront OBJ loader. It reads triangle faces
  written as `v/t/n`. Materials come from `.ssh` files, which set `Diffuse`,
  `Ambient`, `Specular`, `SpecularPower`, `Emissive` and `EmissiveBrightness`.
  - `obj_load_mesh(filename, material_dir)` and `parse_obj(text, material_loader)`
    return an `ObjMesh` of `ObjVertex` values.
  - `load_ssh` and `parse_ssh` return `MaterialParams`.
  - By default, materials are looked up in `data/world/materials`. A material
    that cannot be found falls back to `Default`.
- `skygame.bitmap` reads 32-bit uncompressed BMP images (`load_bmp`,
  `parse_bmp`) into a `Bitmap`. Each pixel is packed as RGBA from the high byte
  to the low byte. Any other format raises `BitmapError`.
- `skygame.vertex` holds vertex layouts: `VertexDef`, `VertexAttribute` and
  `VertexAttributeKind`, plus the mesh vertex layouts `obj_vert_def()` and
  `obj_vert_def_depr()`.
- `skygame.meshes` holds the editor vertex layout (`editor_vert_def()`), the
  unit quad (`unit_quad()`, `tex_quad_vert_def()`) and the editor grid as a
  line list (`create_grid_vertices(num_grid_lines, grid_spacing)`).
- `skygame.shaders` maps each `ShaderId` to its vertex, geometry and pixel
  source file names (`shader_files`). `read_shader_source` reads a source file.
- `skygame.camera` provides `Camera`, which looks down the Z axis with an
  infinite perspective projection. `update(points)` moves it towards the
  average of its position and the tracked points. `set_bounds` clamps it to an
  area. `world_to_view()` and `world_to_projection()` give its matrices.
  `look_at` builds a view matrix.
- `skygame.input` maps keys to player axes and buttons:
  - `InputHandler` records key and mouse events.
  - `PlayerInput` turns key state into axis and button values.
  - `default_mappings()` binds D/A to X, W/S to Y and C to jump.
  - `create_player_inputs(count)` makes players with the default mappings.
  - `key_code_from_ascii` converts a letter or digit to a key code.
- `skygame.character` provides `Character`, the player sprite. It moves by
  `smooth_input`-shaped axis values and gives its sprite placement with
  `local_to_world(aspect)`. `create_character(player_input, path)` loads its
  `Speed` and `Height` from `data/character.json` by default.
- `skygame.environment` holds the layered parallax backdrop.
  `init_environment(world, camera, data_root)` reads
  `data/world/<world>/world.json`, which sets `NumLayers`, `ScreenHeight`,
  `Scattering` and `BoundsPx`. It then loads the layer images `1.bmp` … `N.bmp`
  and `BG.bmp` and bounds the camera to the world. `layer_transform(layer,
  camera)` gives each layer's placement. `Environment.layers_back_to_front()`
  gives the drawing order.
- `skygame.ticks` provides `TickSystem`, a fixed 20 ms timestep accumulator.
  It takes an optional clock and an optional per-step callback.
- `skygame.edit_server` provides `EditServer`, a small HTTP server that sets
  reflected float values while the game runs. Register objects with
  `add_object(name, obj)`.
  - A request `PUT /object/<name>/<property>/...` whose body holds a number
    sets that float.
  - `OPTIONS` answers with CORS headers.
  - `start()` binds to 127.0.0.1:25115 by default. `update()` serves the
    waiting requests without blocking. `close()` stops the server.
  - `handle(method, uri, body)` answers a request directly, without a socket.
- `skygame.containers` provides `StaticArray`, the intrusive `LinkedList` and
  `ListNode`, and `SegmentList`, which iterates newest first.
- `skygame.scope_defer` provides `ScopeDefer`, a context manager that runs
  deferred callbacks in reverse order.
- `skygame.reporting` provides `log`, `logf` and `LogLevel`.
- `skygame.files` provides `load_entire_file`.

## Example

```python
from skygame.camera import Camera
from skygame.character import Character
from skygame.input import InputHandler, KeyStatus, create_player_inputs, key_code_from_ascii

camera = Camera(1280, 720)
handler = InputHandler()
player = create_player_inputs(1)[0]

handler.receive_key(key_code_from_ascii("d"), KeyStatus.DOWN)
player.update(handler)

hero = Character(speed=1.0, height=0.2, input=player)
hero.update(0.02)
camera.update([hero.location])
matrix = camera.world_to_projection()
```

## What it does not do

The package draws nothing and opens no window. It has no command to start a
game. Rendering, the window, the main loop and joystick input are left to the
program that uses it. That program calls these systems once per frame and
hands the resulting data to its own renderer.

## Tests

```
pytest
```