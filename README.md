# rmtoolkit

A library of building blocks for robot control software. It talks to an
embedded controller through fixed-size packets and aims a gimbal-mounted
launcher.

## What is inside

- **Links to the controller.** `rmtoolkit.transporter` defines the abstract
  `Transporter` interface (`open`, `close`, `is_open`, `read`, `write`) and a
  `UdpTransporter`. The `UdpTransporter` receives on a local port and sends to
  a target address, which is `127.0.0.1` by default. `rmtoolkit.uart` adds
  `UartTransporter` for serial lines, built on pyserial. Its `device_path` can
  be a device file or any pyserial URL, such as `loop://`, and it lets you set
  the speed, flow control (0 none, 1 hardware, 2 software), data bits, stop
  bits and parity (`N`, `O`, `E`, `S`). Every transporter works as a context
  manager that opens and closes the link. Every transporter raises
  `TransporterError` on failure.
- **Fixed-size packets.** `rmtoolkit.packet.FixedPacket(capacity)` is a frame
  laid out as `[0xff, data..., check_byte, 0x0d]`.
  - `load_data(fmt, value, index)` writes a value at a byte offset with a
    `struct` format code, and `unload_data(fmt, index)` reads one back.
  - An offset that does not fit in the data area raises `IndexError`.
  - `clear`, `set_check_byte`, `copy_from` and `buffer` complete the interface.
- **Packet transport.** `rmtoolkit.packet_tool.FixedPacketTool(transporter,
  capacity)` sends and receives these frames over any transporter.
  - `send_packet` writes a frame. It raises `TransporterError` if the write
    fails, after it tries to reconnect.
  - `enable_realtime_send(True)` queues packets and sends them from a
    background thread instead. `close()`, or leaving the tool's `with` block,
    stops that thread.
  - `recv_packet` reads once and returns a `FixedPacket`. It returns `None`
    when no whole frame has arrived yet, and it puts split frames back together
    across calls. Frames are checked only by their head and tail bytes; the
    check byte is not verified.
- **Projectile aiming.** `rmtoolkit.projectile` provides
  `GravityProjectileSolver(initial_vel)` and
  `GafProjectileSolver(initial_vel, friction_coeff)`. The first uses a plain
  parabola. The second adds horizontal air friction while the projectile
  descends. Both are built on `IterativeProjectileTool`, which inverts any
  forward motion model `(angle, x) -> (height, time)`. `solve(target_x,
  target_h)` returns the launch angle in radians. It raises `ProjectileError`
  when the angle leaves ±80°, the flight takes longer than 10 s, or the height
  error stays above 1 cm.
- **Gimbal angles.** `rmtoolkit.gimbal.GimbalTransformTool(solver=None)` turns
  a target position in the gimbal frame into `(pitch, yaw)`. Without a solver it
  uses a straight line. `solve_point` accepts an object with `x`, `y`, `z`
  attributes or a sequence of three numbers.
- **Estimation.** `rmtoolkit.kalman.ExtendedKalmanFilter(x, p)` takes its
  Jacobians from forward-mode automatic differentiation of the model functions
  you pass in. Use `predict(transition_model, q, *args)` and
  `update(measurement_model, r, z)` to run it. `state()` and `covariance()`
  return copies of the estimate, and `reset` replaces it. Models receive the
  state as an array and may use arithmetic and numpy functions such as
  `np.sin`.
- **Camera geometry.** `rmtoolkit.mono_measure.MonoMeasureTool` takes a
  row-major 3×3 intrinsic matrix and distortion coefficients through
  `set_camera_info`. It offers `unproject(point, distance)` and
  `calc_view_angle(point)` for a pinhole camera; distortion is stored but not
  applied. `rmtoolkit.geometry` has `rad_to_deg`, `deg_to_rad`,
  `calc_inclination_angle`, `calc_inner_angle` and `calc_circle_from_3points`.
- **Utilities.**
  - `rmtoolkit.timing`: `get_curr_time()` returns a monotonic timestamp in
    nanoseconds, and `count_time_duration(begin, end, unit)` gives whole
    milliseconds or microseconds (`TimeUnit`).
  - `rmtoolkit.debug`: `get_debug()` / `set_debug(value)` hold a process-wide
    switch.
  - `rmtoolkit.url_resolver`: `get_resolved_path(url, package_lookup=None)`
    turns `file:///…` and `package://name/…` URLs into paths, expanding
    `${ROS_HOME}`. By default it looks packages up in the ament index on
    `AMENT_PREFIX_PATH` and raises `LookupError` for an unknown package.
  - `rmtoolkit.task_manager`: `TaskManager(get_task_status, control_task)`
    answers status queries (`TaskStatus`) and start/stop commands (`TaskCmd`).
    It refuses unknown command codes with `False`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Example: send a gimbal command over UDP

```python
from rmtoolkit.transporter import UdpTransporter
from rmtoolkit.packet import FixedPacket
from rmtoolkit.packet_tool import FixedPacketTool

with UdpTransporter(10008, 10009, "127.0.0.1") as link:
    tool = FixedPacketTool(link, 16)
    packet = FixedPacket(16)
    packet.load_data("B", 0x01, 1)   # command id
    packet.load_data("B", 0x00, 2)
    packet.load_data("f", 0.1, 3)    # pitch
    packet.load_data("f", -0.2, 7)   # yaw
    tool.send_packet(packet)
```

## Example: aim at a target

```python
from rmtoolkit.projectile import GravityProjectileSolver
from rmtoolkit.gimbal import GimbalTransformTool

tool = GimbalTransformTool(GravityProjectileSolver(25.0))
pitch, yaw = tool.solve(5.0, 0.5, 0.2)
```

## What this package does not do

The package is a library only. It does not cover:

- command-line programs or long-running services;
- camera capture or image publishing;
- a robot-side communication loop;
- perspective-n-point pose solving;
- drawing on images.

These are left to the application that uses the library.