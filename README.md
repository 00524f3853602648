# iontrack

Building blocks for Monte-Carlo simulations of ions slowing down in matter
and the lattice damage they leave behind.

## Modules

- `iontrack.errfmt`: formats a value together with its error.
  `print_with_err(f, df, fmt, d, parenthesis)` writes either `1.23(5)` or
  `1.23±0.05` style, in fixed (`"f"`), scientific (`"e"`, with a `×10ⁿ`
  suffix) or general (`"g"`) notation. It raises `ValueError` when `df` or
  `d` is not positive. Also `frexp10`, `round_with_err` and `superscript`.
- `iontrack.arrays`: `ArrayND`, an N-dimensional float table in row-major
  order backed by numpy. Binding it to another name shares the data;
  `copy()` makes an independent array. Supports flat or tuple indexing,
  `+=`, `add_squared`, `clear` and `copy_to`.
- `iontrack.corteo`: `CorteoRange(nbits, min_exp, max_exp)`, a log-spaced
  range of float32 points indexed through the IEEE-754 bit layout, with the
  `LinInterp` and `LogInterp` interpolators over data tabulated on it.
- `iontrack.geometry`: `Grid1D` and `Grid3D` rectangular grids with optional
  periodic boundaries, cell lookup, minimum-image distances and
  propagation to cell boundaries (`distance2boundary`, `bring2boundary`),
  plus `deflect_vector` for rotating a direction by scattering angles.
- `iontrack.tally`: `Tally` score tables of shape (atoms, cells), indexed by
  `TallyTable`, with the `Event` flags and the `array_name`,
  `array_description` and `array_group` lookups. Tallies can be summed,
  squared-summed, copied, cloned and checked for energy balance
  (`total_erg`, `debug_check`).
- `iontrack.straggling`: energy-loss straggling after the Bohr, Chu and
  Yang models (`calc_straggling`, `StragglingModel`, `chu_coefficients`).
- `iontrack.damage`: LSS damage energy (`lss_tdam`, `lss_coefficients`),
  NRT vacancy counts (`nrt_vacancies`, `effective_ed`), composition
  helpers (`normalize_fractions`, `cumulative_fractions`, `select_index`)
  and density relations (`atomic_density_from_mass`,
  `mass_density_from_atomic`, `atomic_radius`, `layer_distance`,
  `mean_impact_parameter`).

## What it does not do

iontrack is a library of parts, not a simulator. It has no command-line
program, does not run ion histories, and holds no stopping-power data or
tabulated scattering cross-sections: stopping is passed to
`calc_straggling` as callables supplied by the caller. It does not track
individual defects in a cascade or recombine interstitial-vacancy pairs,
and it does not read or write input or result files.

## Installation

```
pip install .
```

Then run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from iontrack.corteo import CorteoRange, LogInterp
from iontrack.errfmt import print_with_err

r = CorteoRange(4, 0, 2)
xs = list(r)                # 33 log-spaced points from 1 to 4
f = LogInterp(r, [x**2 for x in xs])
print(f(2.5))               # 6.25

print(print_with_err(1.234, 0.05, "f", 1))   # 1.23(5)
```