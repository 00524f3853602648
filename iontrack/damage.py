"""Damage estimates and material averages: LSS damage energy, NRT vacancies,
atomic densities and composition sampling."""

from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import accumulate

AVOGADRO_NM = 6.02214076e2
"""Avogadro's number scaled so that g/cm^3 over g/mol gives atoms/nm^3."""


def lss_coefficients(z: float, m: float) -> tuple[float, float]:
    """Return the LSS (k_d, energy factor) for atomic number z and mass m."""
    if z <= 0 or m <= 0:
        raise ValueError("atomic number and mass must be positive")
    kd = 0.1334 * z ** (2.0 / 3.0) / math.sqrt(m)
    efact = 0.01014 * z ** (-7.0 / 3.0)
    return kd, efact


def lss_tdam(recoil_e: float, z: float, m: float) -> float:
    """Damage energy of a recoil of energy recoil_e [eV] per the LSS theory."""
    if recoil_e < 0:
        raise ValueError("recoil energy must not be negative")
    kd, efact = lss_coefficients(z, m)
    x = efact * recoil_e
    x = x + 3.4008 * x ** (1.0 / 6.0) + 0.40244 * x**0.75
    return recoil_e / (1.0 + kd * x)


def nrt_vacancies(tdam: float, ed: float) -> float:
    """Number of NRT vacancies for damage energy tdam and displacement energy ed."""
    if ed <= 0:
        raise ValueError("displacement energy must be positive")
    if tdam < ed:
        return 0.0
    v = tdam / (2.5 * ed)
    return max(v, 1.0)


def normalize_fractions(fractions: Sequence[float]) -> list[float]:
    """Scale the atomic fractions so that they sum to 1."""
    values = [float(x) for x in fractions]
    if not values:
        raise ValueError("no fractions given")
    if any(x < 0 for x in values):
        raise ValueError("fractions must not be negative")
    total = sum(values)
    if total <= 0:
        raise ValueError("fractions must have a positive sum")
    return [x / total for x in values]


def effective_ed(fractions: Sequence[float], eds: Sequence[float]) -> float:
    """Composition-weighted harmonic mean of the displacement energies."""
    if len(fractions) != len(eds):
        raise ValueError("fractions and displacement energies differ in length")
    if any(ed <= 0 for ed in eds):
        raise ValueError("displacement energies must be positive")
    x = normalize_fractions(fractions)
    return 1.0 / sum(xi / ed for xi, ed in zip(x, eds))


def cumulative_fractions(fractions: Sequence[float]) -> list[float]:
    """Cumulative sums of the normalized fractions, for random selection."""
    return list(accumulate(normalize_fractions(fractions)))


def select_index(cumulative: Sequence[float], u: float) -> int:
    """Index of the atom selected by a uniform number u in [0, 1)."""
    n = len(cumulative)
    if n == 0:
        raise ValueError("no atoms to select from")
    for i, c in enumerate(cumulative[:-1]):
        if u <= c:
            return i
    return n - 1


def atomic_density_from_mass(mass_density: float, mean_mass: float) -> float:
    """Atomic density [at/nm^3] from mass density [g/cm^3] and mean mass [amu]."""
    if mass_density <= 0 or mean_mass <= 0:
        raise ValueError("density and mass must be positive")
    return AVOGADRO_NM * mass_density / mean_mass


def mass_density_from_atomic(atomic_density: float, mean_mass: float) -> float:
    """Mass density [g/cm^3] from atomic density [at/nm^3] and mean mass [amu]."""
    if atomic_density <= 0 or mean_mass <= 0:
        raise ValueError("density and mass must be positive")
    return atomic_density * mean_mass / AVOGADRO_NM


def _check_density(atomic_density: float) -> None:
    if atomic_density <= 0:
        raise ValueError("atomic density must be positive")


def atomic_radius(atomic_density: float) -> float:
    """Radius [nm] of the sphere holding one atom."""
    _check_density(atomic_density)
    return 1.0 / (4.0 * math.pi * atomic_density / 3.0) ** (1.0 / 3.0)


def layer_distance(atomic_density: float) -> float:
    """Mean distance [nm] between atomic layers."""
    _check_density(atomic_density)
    return 1.0 / atomic_density ** (1.0 / 3.0)


def mean_impact_parameter(atomic_density: float) -> float:
    """Mean impact parameter [nm] for a flight path of one atomic radius."""
    _check_density(atomic_density)
    return 1.0 / math.sqrt(math.pi * atomic_density * atomic_radius(atomic_density))