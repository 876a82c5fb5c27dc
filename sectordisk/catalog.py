"""Catalog files kept in the working directory: schemas, sector metadata, disk configs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .geometry import DiskConfig
from .records import FieldType

METADATA_FILE = "metadata.txt"
SCHEMA_FILE = "esquema.txt"
CONFIG_FILE = "discos-config.txt"


def _read_lines(path: Path) -> list[str]:
    """Lines of a file without their newlines; a missing file has none."""
    try:
        content = path.read_text(encoding="utf-8", newline="")
    except FileNotFoundError:
        return []
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _append_line(path: Path, line: str) -> None:
    with path.open("a", encoding="utf-8", newline="") as handle:
        handle.write(line + "\n")


@dataclass(frozen=True)
class Schema:
    """A relation name with its ordered, typed attributes."""

    relation: str
    columns: tuple[tuple[str, FieldType], ...]

    @property
    def attributes(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.columns)

    @property
    def types(self) -> tuple[FieldType, ...]:
        return tuple(kind for _, kind in self.columns)

    def to_line(self) -> str:
        """``relation#attr#type#attr#type...`` without a newline."""
        parts = [self.relation]
        for name, kind in self.columns:
            parts += [name, FieldType(kind).value]
        return "#".join(parts)

    @classmethod
    def from_line(cls, line: str) -> Schema:
        """Parse a schema line; raises ValueError when it is malformed."""
        relation, *rest = line.rstrip("\n").split("#")
        if len(rest) % 2:
            raise ValueError(f"attribute without type in schema line: {line!r}")
        columns = tuple(
            (name, FieldType(kind)) for name, kind in zip(rest[::2], rest[1::2])
        )
        return cls(relation, columns)


@dataclass(frozen=True)
class Catalog:
    """Access to the catalog files stored in ``root``."""

    root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", Path(self.root))

    @property
    def metadata_path(self) -> Path:
        return self.root / METADATA_FILE

    @property
    def schema_path(self) -> Path:
        return self.root / SCHEMA_FILE

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE

    def read_metadata(self) -> dict[str, list[str]]:
        """Map each relation to the sector ids it occupies, sorted by relation."""
        metadata: dict[str, list[str]] = {}
        for line in _read_lines(self.metadata_path):
            name, sep, ids = line.partition(":")
            if not sep:
                continue
            sectors = ids.split(",")
            if sectors[-1] == "":
                sectors.pop()
            metadata[name] = sectors
        return dict(sorted(metadata.items()))

    def update_metadata(self, relation: str, sectors: list[str]) -> None:
        """Record the sectors used by ``relation`` and rewrite the metadata file."""
        metadata = self.read_metadata()
        metadata[relation] = list(sectors)
        with self.metadata_path.open("w", encoding="utf-8", newline="") as handle:
            for name, ids in sorted(metadata.items()):
                handle.write(f"{name}:{','.join(ids)}\n")

    def occupied_sectors(self) -> set[str]:
        """Ids of every sector already claimed by some relation."""
        return {sector for ids in self.read_metadata().values() for sector in ids}

    def sectors_for(self, relation: str) -> set[int]:
        """Sector ids of the first metadata entry for ``relation``."""
        for line in _read_lines(self.metadata_path):
            name, sep, ids = line.partition(":")
            if sep and name == relation:
                return {int(token) for token in ids.split(",") if token}
        return set()

    def append_schema(self, schema: Schema) -> None:
        _append_line(self.schema_path, schema.to_line())

    def find_schema(self, relation: str) -> Schema | None:
        """First schema whose line starts with ``relation#``, if any."""
        prefix = relation + "#"
        for line in _read_lines(self.schema_path):
            if line.startswith(prefix):
                return Schema.from_line(line)
        return None

    def append_config(self, config: DiskConfig) -> None:
        _append_line(self.config_path, config.to_line())

    def find_config(self, name: str) -> DiskConfig | None:
        """Configuration of the disk called ``name``, if it was recorded."""
        for line in _read_lines(self.config_path):
            if line.split(",", 1)[0] == name:
                return DiskConfig.from_line(line)
        return None