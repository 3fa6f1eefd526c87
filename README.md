# radarmap

Map projection, map file handling and the model behind a simple air traffic
radar display.

## Modules

- `radarmap.geodesy`: conversion between Bessel 1841 coordinates and a
  Transverse Mercator grid (`bessel_to_tm`, `tm_to_bessel`), a flat-earth
  approximation (`simple_bessel_to_tm`, `simple_tm_to_bessel`), helpers for
  `DDD.MMSS` values (`min_second_to_degree`, `degree_to_dms`), point rotation
  (`rotate`, `rotate_about`) and angle helpers (`angle_between`,
  `angle_from_deltas`, `points_at_distance`). `Projection` turns `DDD.MMSS`
  positions into kilometre grid units centred on 127°E, 38°N
  (`latlon_to_xy`), converts screen grid points back (`xy_to_latlon`) and
  measures great-circle distances between them (`distance`).
- `radarmap.validators`: keystroke rules for masked entry fields. A field is a
  `MaskedEdit` (displayed text with `_` for untyped positions, and a cursor).
  The `validate_*` functions correct the field after a keystroke for latitude,
  longitude, unsigned coordinates, bearings, gradients, ellipsoid heights,
  dates and facility values; the `finish_*` functions fill the remaining
  blanks when editing ends. `is_latitude` and `is_longitude` check whether a
  value is empty or complete.
- `radarmap.datmap`: converts `.dat` coastline files (tab-separated decimal
  longitude/latitude, polylines separated by `>` lines) into the layered
  `.map` format: `parse_dat`, `write_map`, `convert_file`, and the
  `lat_decimal_to_dms` / `lon_decimal_to_dms` formatters.
- `radarmap.sqlgen`: SQL statement builders. `AirportSqlGen` and `FixSqlGen`
  give the `SELECT` statements for the aerodrome table (`TB_AD`) and the fix
  view (`V_FIX`); `Airport` and `Fix` hold their rows.
- `radarmap.mapfile`: parses `.map` files (`LAYER`, `ID`, `G`/`S` and
  `ENDLAYER` records) into `MapEntry` objects, each carrying its `LayerInfo`
  (line type, fill pattern, colours, font, symbol). `parse_map` reads lines,
  `read_map` reads a file, `to_pixel` projects every point with a
  `Projection`, and `rotate_points` rotates grid points onto the screen.
- `radarmap.aircraft`: an `Aircraft` that turns, climbs and accelerates
  towards its clearance (`clear_heading`, `clear_alt`, `clear_speed`), moves
  across the screen along its heading and keeps a trail of its four previous
  positions. `step(elapsed)` advances by whole seconds; `process(now)`
  advances by the time since the last update.
- `radarmap.radar`: radar scope geometry (`radar_axes`, `radar_circles`,
  `bearing_labels`), the turning `SweepLine`, the data `Label` of each
  aircraft with its connector line and `Alignment`, the aircraft entry
  `ItemForm`, and a `RadarScene` that holds aircraft and their labels.

## Installation

```
pip install .
```

## Converting a .dat file

```
dat2map coastline.dat korea.map
```

The output file is optional and defaults to `new_korea.map` in the current
directory. The command prints an error and exits with status 1 if the input
cannot be read or parsed.

## Library use

```python
from radarmap.geodesy import Projection
from radarmap.mapfile import read_map, to_pixel

proj = Projection()
x, y = proj.latlon_to_xy(127.3000, 37.3000)  # DDD.MMSS values, result in km

entries = read_map("korea.map")
grid_points = to_pixel(entries, proj)
```

```python
from radarmap.aircraft import Aircraft

plane = Aircraft("TEST_0", 50, 5, 100, 30000, "BOGUS_0", 100, 100, 100, 10)
plane.clear_heading = 80
plane.step(1)
print(plane.heading, plane.x, plane.y, plane.trail[0])
```

```python
from radarmap.radar import Alignment, RadarScene

scene = RadarScene()
scene.populate_demo()
scene.align_labels(Alignment.RIGHT)
```

## What the package does not do

It draws nothing: the radar and map modules compute geometry and state, and
leave rendering, windows, timers and mouse handling to the caller. The SQL
builders return statement text only; the package opens no database
connection. Map files are read from paths you give; there are no file
dialogs.

## Tests

```
pip install .[test]
pytest
```