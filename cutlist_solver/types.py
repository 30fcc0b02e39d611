# cutlist_solver/types.py
# Core data structures for 1D cut-list planning.
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Tuple

from .measure import ZERO_LENGTH, to_length, to_price

# max_quantity sentinel meaning "buy as many as needed"
UNLIMITED = -1


def _require_int(owner: str, field_name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{owner}: {field_name} must be an int, got {value!r}")


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class Material:
    """A class of stock sharing supplies and parts, e.g. 'Pine 2x4'."""
    name: str


@dataclass(frozen=True)
class Supply:
    """
    Stock available for cutting.
    A price of zero means the stock is on hand (free).
    max_quantity == UNLIMITED means the supply can be bought without limit.
    """
    name: str
    length: Fraction
    price: Decimal = Decimal(0)
    max_quantity: int = UNLIMITED

    def __post_init__(self):
        object.__setattr__(self, "length", to_length(self.length))
        object.__setattr__(self, "price", to_price(self.price))
        if self.length <= 0:
            raise ValueError(f"Supply {self.name!r}: length must be > 0, got {self.length}")
        if self.price < 0:
            raise ValueError(f"Supply {self.name!r}: price must be >= 0, got {self.price}")
        _require_int(f"Supply {self.name!r}", "max_quantity", self.max_quantity)
        if self.max_quantity < 0 and self.max_quantity != UNLIMITED:
            raise ValueError(
                f"Supply {self.name!r}: max_quantity must be >= 0 or UNLIMITED ({UNLIMITED})"
            )

    @property
    def is_unlimited(self) -> bool:
        return self.max_quantity == UNLIMITED

    def allows(self, consumed: int) -> bool:
        """True if one more instance may be opened after `consumed` were used."""
        return self.is_unlimited or consumed < self.max_quantity


@dataclass(frozen=True)
class Part:
    """A demanded finished length."""
    name: str
    length: Fraction
    quantity: int = 1

    def __post_init__(self):
        object.__setattr__(self, "length", to_length(self.length))
        if self.length <= 0:
            raise ValueError(f"Part {self.name!r}: length must be > 0, got {self.length}")
        _require_int(f"Part {self.name!r}", "quantity", self.quantity)
        if self.quantity < 0:
            raise ValueError(f"Part {self.name!r}: quantity must be >= 0, got {self.quantity}")


@dataclass(frozen=True)
class SubProblem:
    """Supplies, parts and kerf of one material."""
    supplies: Tuple[Supply, ...]
    parts: Tuple[Part, ...]
    blade_width: Fraction = ZERO_LENGTH

    def __post_init__(self):
        object.__setattr__(self, "supplies", tuple(self.supplies))
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "blade_width", to_length(self.blade_width))
        if self.blade_width < 0:
            raise ValueError(f"blade_width must be >= 0, got {self.blade_width}")

    @property
    def total_units(self) -> int:
        return sum(p.quantity for p in self.parts)


# Materials are independent; dict order only affects progress reporting.
Problem = Dict[Material, SubProblem]


# ----------------------------
# Outputs / solution objects
# ----------------------------

@dataclass(frozen=True)
class CutList:
    """
    One cutting pattern: which parts (in order) come out of one supply instance,
    and how many identical supply instances are cut this way.
    """
    supply_index: int
    part_indices: Tuple[int, ...]
    quantity: int = 1

    def __post_init__(self):
        object.__setattr__(self, "part_indices", tuple(self.part_indices))
        if self.quantity < 1:
            raise ValueError(f"CutList quantity must be >= 1, got {self.quantity}")

    @property
    def num_parts(self) -> int:
        return len(self.part_indices)

    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return self.supply_index, self.part_indices


@dataclass(frozen=True)
class SubSolution:
    """Cut lists of one material, with the supplies/parts they index into."""
    cut_lists: Tuple[CutList, ...]
    supplies: Tuple[Supply, ...]
    parts: Tuple[Part, ...]
    blade_width: Fraction = ZERO_LENGTH

    def __post_init__(self):
        object.__setattr__(self, "cut_lists", tuple(self.cut_lists))
        object.__setattr__(self, "supplies", tuple(self.supplies))
        object.__setattr__(self, "parts", tuple(self.parts))

    def supply_of(self, cut_list: CutList) -> Supply:
        return self.supplies[cut_list.supply_index]

    def parts_of(self, cut_list: CutList) -> List[Part]:
        return [self.parts[i] for i in cut_list.part_indices]

    def num_pieces(self) -> int:
        return sum(cl.quantity for cl in self.cut_lists)


@dataclass(frozen=True, eq=False)
class Solution(Mapping):
    """
    Read-only mapping Material -> SubSolution produced by one solve call.
    A later solve produces a new Solution; this one is never mutated.
    """
    _sub_solutions: Mapping = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "_sub_solutions", MappingProxyType(dict(self._sub_solutions)))

    def __getitem__(self, material: Material) -> SubSolution:
        return self._sub_solutions[material]

    def __iter__(self) -> Iterator[Material]:
        return iter(self._sub_solutions)

    def __len__(self) -> int:
        return len(self._sub_solutions)

    def num_pieces(self) -> int:
        return sum(sub.num_pieces() for sub in self._sub_solutions.values())


# ----------------------------
# Helper utilities
# ----------------------------

def pattern_length(parts: List[Part], blade_width: Fraction) -> Fraction:
    """Length consumed by cutting `parts` from one piece: parts + one kerf per boundary."""
    if not parts:
        return ZERO_LENGTH
    return sum((p.length for p in parts), ZERO_LENGTH) + (len(parts) - 1) * blade_width


def build_problem(
    supply_rows: Iterable[Tuple[str, Supply]],
    part_rows: Iterable[Tuple[str, Part]],
    blade_width: Fraction = ZERO_LENGTH,
) -> Problem:
    """
    Group flat (material name, Supply) / (material name, Part) rows into a Problem.
    Materials keep first-seen order (supply rows, then part rows); a material
    with parts but no supplies gets an empty supply tuple (solving it reports
    the missing stock).
    """
    supplies: Dict[str, List[Supply]] = {}
    parts: Dict[str, List[Part]] = {}
    for name, supply in supply_rows:
        supplies.setdefault(name, []).append(supply)
        parts.setdefault(name, [])
    for name, part in part_rows:
        parts.setdefault(name, []).append(part)
        supplies.setdefault(name, [])

    return {
        Material(name): SubProblem(supplies=tuple(supplies[name]), parts=tuple(parts[name]), blade_width=blade_width)
        for name in supplies
    }
