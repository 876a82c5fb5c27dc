"""Physical layout of a simulated disk: platters, surfaces, tracks, blocks, sectors."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Sector:
    """A fixed-size sector backed by a text file."""

    id: int
    size: int
    path: Path


@dataclass(frozen=True)
class Block:
    id: int
    sectors: tuple[Sector, ...]


@dataclass(frozen=True)
class Track:
    id: int
    blocks: tuple[Block, ...]


@dataclass(frozen=True)
class Surface:
    id: int
    tracks: tuple[Track, ...]


@dataclass(frozen=True)
class Platter:
    id: int
    surfaces: tuple[Surface, ...]


@dataclass(frozen=True)
class DiskConfig:
    """Dimensions of a disk, as stored one per line in the configuration file."""

    name: str
    platters: int
    surfaces: int
    tracks: int
    blocks: int
    sectors: int
    sector_size: int

    def total_sectors(self) -> int:
        """Number of sectors on the whole disk."""
        return self.platters * self.surfaces * self.tracks * self.blocks * self.sectors

    def capacity(self) -> int:
        """Total capacity of the disk in bytes."""
        return self.total_sectors() * self.sector_size

    def to_line(self) -> str:
        """Comma separated form used in the configuration file (no newline)."""
        numbers = (
            self.platters,
            self.surfaces,
            self.tracks,
            self.blocks,
            self.sectors,
            self.sector_size,
        )
        return ",".join([self.name, *map(str, numbers)])

    @classmethod
    def from_line(cls, line: str) -> DiskConfig:
        """Parse a configuration line; raises ValueError when it is malformed."""
        tokens = line.rstrip("\n").split(",")
        if len(tokens) < 7:
            raise ValueError(f"incomplete disk configuration: {line!r}")
        name, *numbers = tokens[:7]
        try:
            values = [int(token) for token in numbers]
        except ValueError as exc:
            raise ValueError(f"invalid disk configuration: {line!r}") from exc
        return cls(name, *values)


def build_platters(root: str | Path, config: DiskConfig) -> tuple[Platter, ...]:
    """Build the in-memory hierarchy of a disk living under ``root/config.name``.

    Sector ids are global and numbered from 1 in platter, surface, track,
    block, sector order. No files are touched.
    """
    base = Path(root) / config.name
    ids = count(1)

    def sectors(block_dir: Path) -> tuple[Sector, ...]:
        return tuple(
            Sector(next(ids), config.sector_size, block_dir / f"Sector{s}.txt")
            for s in range(1, config.sectors + 1)
        )

    def blocks(track_dir: Path) -> tuple[Block, ...]:
        return tuple(
            Block(b, sectors(track_dir / f"Bloque{b}"))
            for b in range(1, config.blocks + 1)
        )

    def tracks(surface_dir: Path) -> tuple[Track, ...]:
        return tuple(
            Track(k, blocks(surface_dir / f"Pista{k}"))
            for k in range(1, config.tracks + 1)
        )

    def surfaces(platter_dir: Path) -> tuple[Surface, ...]:
        return tuple(
            Surface(j, tracks(platter_dir / f"Superficie{j}"))
            for j in range(1, config.surfaces + 1)
        )

    return tuple(
        Platter(i, surfaces(base / f"Plato{i}")) for i in range(1, config.platters + 1)
    )


def iter_sectors(platters: Iterable[Platter]) -> Iterator[Sector]:
    """Yield every sector in physical order."""
    for platter in platters:
        for surface in platter.surfaces:
            for track in surface.tracks:
                for block in track.blocks:
                    yield from block.sectors