"""Symbol table entries: variables, constants and functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional

MAX_ARRAY_DIMENSION = 2


class SymbolTableEntryType(IntEnum):
    """Kind of symbol an entry describes."""

    UNKNOWN = 0
    VARIABLE = 1
    CONSTANT = 2
    FUNCTION = 3


class SymbolValueType(IntEnum):
    """Value type of a symbol."""

    ANY = 0
    VOID = 1
    INT = 2
    CHAR = 3
    BOOL = 4
    ARRAY = 5


def _check_sizes(sizes: tuple[int, ...]) -> tuple[int, ...]:
    sizes = tuple(sizes)
    if len(sizes) > MAX_ARRAY_DIMENSION:
        raise ValueError(f"at most {MAX_ARRAY_DIMENSION} array dimensions are supported")
    return sizes


def _check_dimension_index(dimension: int) -> None:
    if not 0 <= dimension < MAX_ARRAY_DIMENSION:
        raise IndexError(f"dimension {dimension} out of range")


@dataclass
class SymbolTableEntry:
    """Common part of every symbol table entry."""

    name: str
    entry_type: ClassVar[SymbolTableEntryType] = SymbolTableEntryType.UNKNOWN

    def alter_name(self, name: str) -> None:
        """Rename the entry; meant only for resolving name collisions."""
        self.name = name


@dataclass
class VariableEntry(SymbolTableEntry):
    """A variable; ``sizes`` holds one length per array dimension."""

    value_type: SymbolValueType = SymbolValueType.INT
    sizes: tuple[int, ...] = ()
    entry_type: ClassVar[SymbolTableEntryType] = SymbolTableEntryType.VARIABLE

    def __post_init__(self) -> None:
        self.sizes = _check_sizes(self.sizes)

    @property
    def dimension(self) -> int:
        return len(self.sizes)

    def array_size(self, dimension: int) -> int:
        """Length along ``dimension``; 0 for a dimension the array lacks."""
        _check_dimension_index(dimension)
        return self.sizes[dimension] if dimension < len(self.sizes) else 0


@dataclass
class ConstantEntry(SymbolTableEntry):
    """A constant with its scalar value or its array of values."""

    value_type: SymbolValueType = SymbolValueType.INT
    sizes: tuple[int, ...] = ()
    value: int = 0
    values: Optional[list[list[int]]] = None
    entry_type: ClassVar[SymbolTableEntryType] = SymbolTableEntryType.CONSTANT

    def __post_init__(self) -> None:
        self.sizes = _check_sizes(self.sizes)
        if self.values is None:
            if len(self.sizes) == 1:
                self.values = [[0] * self.sizes[0]]
            elif len(self.sizes) == 2:
                rows, columns = self.sizes
                self.values = [[0] * columns for _ in range(rows)]
            else:
                self.values = []
        else:
            self.values = [list(row) for row in self.values]

    @property
    def dimension(self) -> int:
        return len(self.sizes)

    def array_size(self, dimension: int) -> int:
        """Length along ``dimension``; 0 for a dimension the array lacks."""
        _check_dimension_index(dimension)
        return self.sizes[dimension] if dimension < len(self.sizes) else 0

    def value_at(self, *args: int) -> int:
        """The scalar value, ``values[0][i]`` for one index, ``values[i][j]`` for two."""
        if not args:
            return self.value
        if len(args) == 1:
            return self.values[0][args[0]]
        if len(args) == 2:
            return self.values[args[0]][args[1]]
        raise TypeError("value_at takes at most two indices")


@dataclass(frozen=True)
class FunctionParam:
    """A formal parameter of a function."""

    value_type: SymbolValueType
    name: str
    dimension: int
    sizes: tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        if not 0 <= self.dimension <= MAX_ARRAY_DIMENSION:
            raise ValueError(f"invalid parameter dimension {self.dimension}")


@dataclass
class FunctionEntry(SymbolTableEntry):
    """A function with its return type and parameters."""

    value_type: SymbolValueType = SymbolValueType.INT
    params: list[FunctionParam] = field(default_factory=list)
    entry_type: ClassVar[SymbolTableEntryType] = SymbolTableEntryType.FUNCTION

    @property
    def args_count(self) -> int:
        return len(self.params)

    def add_param(self, value_type: SymbolValueType, name: str, dimension: int, size: int) -> "FunctionEntry":
        """Append a parameter; ``size`` is the length of its second dimension."""
        self.params.append(FunctionParam(value_type, name, dimension, (0, size)))
        return self

    def param(self, index: int) -> FunctionParam:
        if not 0 <= index < len(self.params):
            raise IndexError(f"parameter {index} out of range")
        return self.params[index]