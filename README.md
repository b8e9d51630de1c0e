# divedeco

A decompression model library implementing the Bühlmann ZH-L16C algorithm with
gradient factors. It tracks the inert-gas (nitrogen and helium) loading of 16
tissue compartments over a dive profile and computes no-decompression limits,
ceilings, decompression schedules with gas switches, and oxygen toxicity
(CNS percentage and OTU).

The package has no runtime dependencies.

## Installation

```
pip install divedeco
```

## Quick start

```python
from divedeco.config import BuhlmannConfig
from divedeco.gas import Gas
from divedeco.model import BuhlmannModel
from divedeco.units import Depth, Time

model = BuhlmannModel(BuhlmannConfig())   # GF 100/100, 1013 mbar surface pressure

air = Gas.air()
model.record(Depth.from_meters(30), Time.from_minutes(10), air)

print(model.ndl().as_minutes())           # no-decompression limit in whole minutes, capped at 99
print(model.ceiling().as_meters())        # current ceiling in meters
```

`BuhlmannModel()` with no argument uses the default configuration;
`BuehlmannModel` is an alias of the same class.

## Recording a dive

- `record(depth, time, gas)` – a segment held at a constant depth.
- `record_travel(target_depth, time, gas)` – a linear ascent or descent over
  the given time, applied in one-second steps.
- `record_travel_with_rate(target_depth, rate, gas)` – the same, at a rate in
  meters per minute.

A negative depth raises `ValueError`. `dive_state()` returns a `DiveState`
with the current depth, elapsed time, gas and oxygen exposure.

## Configuration

`BuhlmannConfig` (in `divedeco.config`) holds gradient factors, surface
pressure (mbar), deco ascent rate (m/min), ceiling type, ceiling rounding and
whether all tissues' M-values are recalculated on the GF slope. It is frozen;
the `with_...` methods return a new configuration:

```python
from divedeco.config import BuhlmannConfig, CeilingType

config = (
    BuhlmannConfig()
    .with_gradient_factors(30, 70)
    .with_surface_pressure(1013)
    .with_deco_ascent_rate(9)
    .with_ceiling_type(CeilingType.ADAPTIVE)
    .with_round_ceiling(True)
)
config.validate()   # raises ConfigValidationError on invalid values
```

Limits checked by `validate()`: gradient factors 1–100 with GF low not above
GF high, surface pressure 500–1500 mbar, ascent rate 1–30. A
`ConfigValidationError` carries the offending `field` and a `reason`. Building
a model with an invalid config raises it, as does `model.update_config(...)`.

`CeilingType.ACTUAL` takes the ceiling of the leading compartment;
`CeilingType.ADAPTIVE` simulates an ascent towards the ceiling and reports
where it settles.

## Decompression schedule

```python
from divedeco.config import BuhlmannConfig
from divedeco.gas import Gas
from divedeco.model import BuhlmannModel
from divedeco.units import Depth, Time

model = BuhlmannModel(BuhlmannConfig().with_gradient_factors(30, 70))

air = Gas.air()
ean50 = Gas(0.5, 0.0)
oxygen = Gas(1.0, 0.0)

model.record_travel_with_rate(Depth.from_meters(40), 9, air)
model.record(Depth.from_meters(40), Time.from_minutes(20), air)

runtime = model.deco([air, ean50, oxygen])
for stage in runtime.deco_stages:
    print(stage.stage_type, stage.start_depth, stage.end_depth,
          stage.duration.as_seconds(), stage.gas)
print("TTS:", runtime.tts.as_minutes(), "min")
print("TTS @+5:", runtime.tts_at_5.as_minutes(), "min")
print("TTS delta @+5:", runtime.tts_delta_at_5.as_minutes(), "min")
```

Stages are `DecoStage` objects of type `DecoStageType.ASCENT`,
`DecoStageType.DECO_STOP` or `DecoStageType.GAS_SWITCH`. Stops are placed on
3 m steps; gas switches happen at a maximum ppO2 of 1.6 and an equivalent
narcotic depth of at most 30 m. The model itself is not changed by `deco`.

`deco` raises `EmptyGasListError` when no gases are given and
`CurrentGasNotInListError` when the gas currently breathed is missing from the
list; both derive from `DecoCalculationError` (a `ValueError`), all in
`divedeco.deco`.

## Other figures

- `model.supersaturation()` – highest GF99 and surface GF over all compartments.
- `model.in_deco()` – whether a direct ascent is no longer allowed.
- `model.cns()` / `model.otu()` – oxygen toxicity accumulated so far.
- `model.tissues()` – copies of the 16 `Compartment` objects.
- `model.fork()` – an independent copy flagged as a simulation.
- `Gas.max_operating_depth(ppo2)`, `Gas.equivalent_narcotic_depth(depth)`,
  `Gas.partial_pressures(depth, surface_pressure)` and `Gas.id()` (e.g. `"21/35"`).

## Units

`Depth` (in `divedeco.units`) is built from meters or feet and `Time` from
seconds or minutes; both support addition, subtraction, multiplication and
division and compare by value:

```python
from divedeco.units import Depth, Time, Units

Depth.from_feet(100).as_meters()          # 30.48
Depth.from_units(1, Units.IMPERIAL)       # 0.3048 m
Time.from_minutes(0.5).as_seconds()       # 30.0
```

## What it does not do

This is a library only: there is no command-line tool, no dive log storage and
no import of dive computer files. Profiles are fed to the model in code.

## Running the tests

```
pip install -e .[test]
pytest
```

This library is for research and education. Do not rely on it to plan real dives.