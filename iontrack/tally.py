"""Monte-Carlo score tables organised by quantity, atom and cell."""

from __future__ import annotations

import enum

import numpy as np

from iontrack.arrays import ArrayND


class Event(enum.IntFlag):
    """The types of Monte-Carlo events."""

    NEW_SOURCE_ION = 1 << 0
    NEW_RECOIL = 1 << 1
    SCATTERING = 1 << 2
    ION_EXIT = 1 << 3
    ION_STOP = 1 << 4
    BOUNDARY_CROSSING = 1 << 5
    REPLACEMENT = 1 << 6
    VACANCY = 1 << 7
    CASCADE_COMPLETE = 1 << 8
    NEW_FLIGHT_PATH = 1 << 9
    N_EVENT = 1 << 10


class TallyTable(enum.IntEnum):
    """The standard score tables; TOTALS holds the sums of all others."""

    TOTALS = 0
    VACANCIES = 1
    INTERSTITIALS = 2
    REPLACEMENTS = 3
    RECOMBINATIONS = 4
    PKAS = 5
    LOST = 6
    E_IONIZ = 7
    E_LATTICE = 8
    E_STORED = 9
    E_RECOIL = 10
    E_PKA = 11
    E_LOST = 12
    TDAM = 13
    TDAM_LSS = 14
    VNRT = 15
    VNRT_LSS = 16
    FLIGHT_PATH = 17
    COLLISIONS = 18


STD_TALLIES = len(TallyTable)

_NAMES = (
    "Totals", "Vacancies", "Implantations", "Replacements",
    "Recombinations", "PKAs", "Lost", "Ionization",
    "Lattice", "Stored", "Recoils", "PKA",
    "Lost", "Tdam", "Tdam_LSS", "Vnrt",
    "Vnrt_LSS", "flight_path", "collisions", "X",
)

_DESCRIPTIONS = (
    "Totals of all quantities",
    "Vacancies",
    "Implantations & Interstitials",
    "Replacements",
    "Intra-cascade recombinations",
    "PKAs",
    "Ions that exit the simulation volume",
    "Energy deposited to ionization [eV]",
    "Energy deposited to the lattice as thermal energy [eV]",
    "Energy stored in lattice defects [eV]",
    "Recoil energy [eV]",
    "PKA recoil energy [eV]",
    "Energy lost due to ions exiting the simulation [eV]",
    "Damage energy [eV]",
    "Damage energy estimated by the LSS approximation [eV]",
    "Vacancies per the NRT model using Tdam",
    "Vacancies per the NRT model using Tdam_LSS",
    "Flight path [nm]",
    "Collisions",
    "X",
)

_GROUPS = (
    "totals",
    "defects", "defects", "defects", "defects", "defects", "defects",
    "energy_deposition", "energy_deposition", "energy_deposition",
    "energy_deposition", "energy_deposition", "energy_deposition",
    "damage", "damage", "damage", "damage",
    "ion_stat", "ion_stat",
    "X",
)


def _lookup(table: tuple[str, ...], i: int) -> str:
    return table[i] if 0 <= i < STD_TALLIES else table[STD_TALLIES]


def array_name(i: int) -> str:
    """Short name of the i-th table, "X" if i is out of range."""
    return _lookup(_NAMES, i)


def array_description(i: int) -> str:
    """Description of the i-th table, "X" if i is out of range."""
    return _lookup(_DESCRIPTIONS, i)


def array_group(i: int) -> str:
    """Group name of the i-th table, "X" if i is out of range."""
    return _lookup(_GROUPS, i)


class Tally:
    """A set of score tables, each of shape (natoms, ncells).

    Table 0 is one-dimensional and holds the totals of all other tables.
    """

    def __init__(self):
        self._arrays: list[ArrayND] = [ArrayND() for _ in range(STD_TALLIES)]
        self.event_mask = int(Event.N_EVENT) - 1

    def init(self, natoms: int, ncells: int) -> None:
        """Allocate zeroed tables for the given numbers of atoms and cells."""
        self._arrays[0] = ArrayND(STD_TALLIES)
        for i in range(1, STD_TALLIES):
            self._arrays[i] = ArrayND(natoms, ncells)

    def array_names(self) -> list[str]:
        return ["histories"] + [array_name(i) for i in range(1, STD_TALLIES)]

    def at(self, i: int) -> ArrayND:
        """Return the i-th table; the data is shared, not copied."""
        return self._arrays[i]

    def clear(self) -> None:
        """Zero out all scores."""
        for a in self._arrays:
            a.clear()

    def compute_sums(self) -> None:
        """Add the sum of every table to the totals table."""
        totals = self._arrays[0]
        totals[0] = 1.0
        for i in range(1, STD_TALLIES):
            totals[i] = totals[i] + float(self._arrays[i].data().sum())

    def __iadd__(self, other: "Tally") -> "Tally":
        for mine, theirs in zip(self._arrays, other._arrays):
            if not mine.is_null() and not theirs.is_null():
                mine += theirs
        return self

    def add_squared(self, other: "Tally") -> None:
        """Add the squares of the other tally's scores."""
        for mine, theirs in zip(self._arrays, other._arrays):
            if not mine.is_null() and not theirs.is_null():
                mine.add_squared(theirs)

    def copy_from(self, other: "Tally") -> None:
        """Replace the tables with independent copies of other's."""
        self._arrays = [a.copy() for a in other._arrays]

    def copy_to(self, other: "Tally") -> None:
        """Copy the scores into other's existing tables of equal size."""
        for mine, theirs in zip(self._arrays, other._arrays):
            mine.copy_to(theirs)

    def clone(self) -> "Tally":
        t = Tally()
        t.copy_from(self)
        t.event_mask = self.event_mask
        return t

    def _table(self, k: TallyTable) -> np.ndarray:
        a = self._arrays[k]
        return a.data().reshape(a.dim())

    def total_erg(self, atom_id: int | None = None) -> float:
        """Total energy accounted for.

        For one atom id: ionization, lattice, stored, recoil and lost
        energy. Over all atoms: the same without the recoil energy.
        """
        if atom_id is None:
            kinds = (
                TallyTable.E_IONIZ,
                TallyTable.E_LATTICE,
                TallyTable.E_STORED,
                TallyTable.E_LOST,
            )
            return float(sum(self._table(k).sum() for k in kinds))
        kinds = (
            TallyTable.E_IONIZ,
            TallyTable.E_LATTICE,
            TallyTable.E_STORED,
            TallyTable.E_RECOIL,
            TallyTable.E_LOST,
        )
        return float(sum(self._table(k)[atom_id].sum() for k in kinds))

    def debug_check(self, e0: float, atom_id: int | None = None) -> bool:
        """Check that the scored energy balances the initial energy e0."""
        if atom_id is not None:
            return abs(self.total_erg(atom_id) - e0) < 1e-3
        s = (
            self._table(TallyTable.E_IONIZ).sum()
            + self._table(TallyTable.E_LATTICE)[0].sum()
            + self._table(TallyTable.E_STORED)[0].sum()
            + self._table(TallyTable.E_LOST).sum()
        )
        return abs(float(s) - e0) < 1e-3