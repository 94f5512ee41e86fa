from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Tuple

from chromashift.constants import BASE_COLOR_ORDER, MAX_PALETTE_SIZE, MIN_PALETTE_SIZE
from chromashift.errors import PreconditionViolation


@dataclass(frozen=True, slots=True)
class Palette:
    """Ordered set of distinct colors defining the shift successor relation.

    The color -> index map is built once so ``successor`` is a dict lookup.
    Unknown colors raise ``PreconditionViolation`` instead of wrapping to index 0.
    """

    colors: Tuple[str, ...]
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        colors = tuple(self.colors)
        if not colors:
            raise PreconditionViolation("Palette must contain at least one color")
        if len(set(colors)) != len(colors):
            raise PreconditionViolation(f"Palette colors must be distinct: {colors!r}")
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "_index", {name: i for i, name in enumerate(colors)})

    @classmethod
    def of(cls, colors: Iterable[str]) -> "Palette":
        return cls(tuple(colors))

    @classmethod
    def base(cls, count: int) -> "Palette":
        """Return the first ``count`` base colors."""
        if not MIN_PALETTE_SIZE <= count <= MAX_PALETTE_SIZE:
            raise PreconditionViolation(
                f"Palette size must be in [{MIN_PALETTE_SIZE}, {MAX_PALETTE_SIZE}], got {count}"
            )
        return cls(tuple(BASE_COLOR_ORDER[:count]))

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    def __contains__(self, color: object) -> bool:
        return color in self._index

    def __getitem__(self, index: int) -> str:
        return self.colors[index]

    def index_of(self, color: str) -> int:
        try:
            return self._index[color]
        except KeyError:
            raise PreconditionViolation(f"Color {color!r} is not in palette {self.colors!r}") from None

    def successor(self, color: str) -> str:
        return self.colors[(self.index_of(color) + 1) % len(self.colors)]
