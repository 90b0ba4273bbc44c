# th25

A virtual control core and hardware simulators for an educational
radiotherapy linear accelerator. The package models safety-relevant parts
of such a machine in plain Python. It covers treatment-mode changes that
are guarded by beam state and energy limits. It covers bending-magnet
current targets with a tolerance check. It provides a bounded FIFO message
queue. It also provides simulated devices: an electron gun, a bending
magnet, a turntable and an ion chamber. The devices support optional
deterministic noise, and some support fault injection.

The package has no runtime dependencies and no command-line entry point. You
use it as a library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Overview

| Module | Purpose |
| --- | --- |
| `th25.errors` | `ControlError` and its subclasses `ModeBeamOnNotAllowed`, `ModeInvalidTransition`, `ModePositionMismatch` and `MagnetCurrentDeviation`. Each class has a `code` attribute naming the error. |
| `th25.version` | `version()`, which returns `"0.2.0-inc1-skeleton"`, and `stub_label()`, which returns a label for the simulator layer |
| `th25.in_process_queue` | `InProcessQueue`, a bounded FIFO for one producer and one consumer thread |
| `th25.treatment_mode_manager` | `TreatmentMode`, `BeamState`, `EnergyMeV`, `EnergyMV`, `TreatmentModeManager` |
| `th25.noise` | `LcgNoise` and `normalize_to_unit_range`, the seeded noise source used by the simulators |
| `th25.electron_gun_sim` | `ElectronGunSim`: 0.0–10.0 mA, ±1 % read noise |
| `th25.bending_magnet_sim` | `BendingMagnetSim`: 0.0–500.0 A, ±2 % read noise |
| `th25.turntable_sim` | `TurntableSim`: −100.0–+100.0 mm, three sensors (`SensorId`), ±0.1 mm noise and per-sensor `FaultMode` injection |
| `th25.ion_chamber_sim` | `IonChamberSim`: two channels (`ChannelId`), doses of 0.0–10000.0 cGy, and saturation or channel-failure faults |
| `th25.bending_magnet_manager` | `EnergyMagnetMap` (energy to current) and `BendingMagnetManager` (target current and ±5 % tolerance) |

## Examples

### Changing treatment mode

A refused request raises a `ControlError` subclass. The manager refuses a
change while the beam is not off. It also refuses a change when the energy
kind does not match the mode, or when the energy is out of range. The ranges
are 1.0–25.0 MeV for electron mode and 5.0–25.0 MV for X-ray mode.

```python
from th25.treatment_mode_manager import (
    BeamState, EnergyMeV, TreatmentMode, TreatmentModeManager,
)
from th25.errors import ModeBeamOnNotAllowed

manager = TreatmentModeManager(TreatmentMode.LIGHT)
manager.request_mode_change(TreatmentMode.ELECTRON, EnergyMeV(10.0), BeamState.OFF)
assert manager.current_mode() is TreatmentMode.ELECTRON

try:
    manager.request_light_mode(BeamState.ON)
except ModeBeamOnNotAllowed:
    pass
```

`verify_mode_consistency(mode)` raises `ModePositionMismatch` if the current
mode is not `mode`.

### Bending magnet target current

```python
from th25.bending_magnet_manager import BendingMagnetManager
from th25.treatment_mode_manager import EnergyMV, TreatmentMode

magnet = BendingMagnetManager()
magnet.set_current_for_energy(TreatmentMode.XRAY, EnergyMV(10.0))
assert magnet.current_target() == 100.0

magnet.inject_actual_current(103.0)
assert magnet.is_within_tolerance()
```

### Simulated bending magnet

Commands outside the device range saturate at the nearest limit. The noise
is reproducible for a given seed.

```python
from th25.bending_magnet_sim import BendingMagnetSim

sim = BendingMagnetSim()
sim.set_current(750.0)
assert sim.current_commanded() == 500.0

sim.set_current(200.0)
sim.enable_noise(42)
reading = sim.read_actual_current()   # within 196.0 .. 204.0
```

### Turntable fault injection

```python
from th25.turntable_sim import FaultMode, SensorId, TurntableSim

table = TurntableSim()
table.command_position(50.0)
table.inject_stuck_at_value(SensorId.SENSOR0, 10.0)
table.inject_fault(SensorId.SENSOR0, FaultMode.STUCK_AT)
assert table.read_sensor(SensorId.SENSOR0) == 10.0
assert table.read_sensor(SensorId.SENSOR1) == 50.0
```

A sensor in `FaultMode.DELAY` reports the previously commanded position. A
sensor in `FaultMode.NO_RESPONSE` reports 0.0 mm.

### Bounded queue

The capacity must be a power of two and at least 2. The queue holds at most
`capacity - 1` messages at once.

```python
from th25.in_process_queue import InProcessQueue

queue = InProcessQueue(4)
assert queue.try_publish("beam-off")
assert queue.try_consume() == "beam-off"
assert queue.try_consume() is None
```

## What it does not do

- The managers do not read from the simulators. `BendingMagnetManager` compares against a value set with `inject_actual_current`.
- `TreatmentModeManager.verify_mode_consistency` checks only the manager's own state. It does not check turntable sensors.
- No beam control, dose targeting or start-up self-check is provided.
- The simulators model no response time. A command takes effect at once.
- There is no command, server, user interface or persistent storage.

## Disclaimer

This is a teaching and simulation model. It is not medical device software.
Never use it to control real equipment.