"""A simulated disk whose sectors are small text files holding relation records."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .catalog import Catalog, Schema
from .geometry import DiskConfig, Platter, Sector, build_platters, iter_sectors
from .records import infer_type, matches, parse_csv_line


class DiskError(Exception):
    """Raised when a disk operation cannot be carried out."""


@dataclass(frozen=True)
class InsertResult:
    """Outcome of storing the records of one relation."""

    relation: str
    inserted: int
    total: int
    sectors: tuple[str, ...]

    @property
    def complete(self) -> bool:
        """True when every record found room on the disk."""
        return self.inserted >= self.total


def _lines(path: Path) -> list[str]:
    """Lines of a file without their newlines; raises OSError if it cannot be read."""
    lines = path.read_text(encoding="utf-8", newline="").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _lines_or_empty(path: Path) -> list[str]:
    try:
        return _lines(path)
    except OSError:
        return []


@dataclass
class Disk:
    """A disk laid out under ``workdir/config.name`` with its catalog in ``workdir``."""

    config: DiskConfig
    workdir: Path
    platters: tuple[Platter, ...] = field(init=False, repr=False)
    catalog: Catalog = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.workdir = Path(self.workdir)
        self.platters = build_platters(self.workdir, self.config)
        self.catalog = Catalog(self.workdir)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def root(self) -> Path:
        return self.workdir / self.config.name

    @classmethod
    def create(cls, config: DiskConfig, workdir: str | Path) -> Disk:
        """Create the directory tree and empty sector files, and record the config."""
        disk = cls(config, Path(workdir))
        disk.root.mkdir(exist_ok=True)
        for sector in disk.sectors():
            for directory in reversed(sector.path.parents):
                if disk.root in directory.parents:
                    directory.mkdir(exist_ok=True)
            sector.path.write_bytes(b"")
        disk.catalog.append_config(config)
        return disk

    @classmethod
    def load(cls, name: str, workdir: str | Path) -> Disk:
        """Open a disk previously recorded in the configuration file."""
        catalog = Catalog(Path(workdir))
        if not catalog.config_path.is_file():
            raise DiskError(f"No se pudo abrir {catalog.config_path.name}")
        config = catalog.find_config(name)
        if config is None:
            raise DiskError(f"No se encontro configuracion para el disco '{name}'")
        return cls(config, Path(workdir))

    def sectors(self) -> Iterator[Sector]:
        """Every sector of the disk in physical order."""
        return iter_sectors(self.platters)

    def capacity(self) -> int:
        """Total capacity in bytes."""
        return self.config.capacity()

    def used_bytes(self) -> int:
        """Bytes held by the regular files under the disk directory."""
        return sum(path.stat().st_size for path in self.root.rglob("*") if path.is_file())

    def free_bytes(self) -> int:
        return self.capacity() - self.used_bytes()

    def _store(self, relation: str, records: list[str]) -> InsertResult:
        """Append records to free sectors in order and record where they went."""
        occupied = self.catalog.occupied_sectors()
        queue = deque(record.encode("utf-8") for record in records)
        assigned: list[str] = []
        for sector in self.sectors():
            sector_id = str(sector.id)
            if sector_id in occupied:
                continue
            try:
                handle = sector.path.open("r+b")
            except OSError:
                continue
            wrote = False
            with handle:
                handle.seek(0, 2)
                available = max(sector.size - handle.tell(), 0)
                while queue and len(queue[0]) <= available:
                    data = queue.popleft()
                    handle.write(data)
                    available -= len(data)
                    wrote = True
            if wrote:
                assigned.append(sector_id)
            if not queue:
                break
        self.catalog.update_metadata(relation, assigned)
        return InsertResult(relation, len(records) - len(queue), len(records), tuple(assigned))

    def insert_csv(self, csv_path: str | Path) -> InsertResult:
        """Store a CSV file with a header as a new relation named after the file."""
        path = self.workdir / csv_path
        try:
            lines = _lines(path)
        except OSError as exc:
            raise DiskError("No se pudo abrir el archivo CSV.") from exc
        if not lines:
            raise DiskError("El archivo CSV está vacío.")
        if len(lines) < 2:
            raise DiskError("El archivo solo tiene cabecera, no hay registros.")

        attributes = parse_csv_line(lines[0])
        first_row = parse_csv_line(lines[1])
        if len(attributes) != len(first_row):
            raise DiskError(
                "Cantidad de atributos y valores en la primera línea no coinciden."
            )

        relation = Path(csv_path).name.partition(".")[0]
        columns = tuple(zip(attributes, map(infer_type, first_row)))
        self.catalog.append_schema(Schema(relation, columns))

        records = ["#".join(parse_csv_line(line)) + "\n" for line in lines[1:]]
        return self._store(relation, records)

    def insert_rows(self, path: str | Path, relation: str | None = None) -> InsertResult:
        """Store a headerless file of records, commas turned into field separators.

        The sectors are recorded under ``relation``, or under the path as given.
        """
        source = self.workdir / path
        try:
            lines = _lines(source)
        except OSError as exc:
            raise DiskError(
                f"No se pudo abrir el archivo '{path}' para insertar registros."
            ) from exc
        records = [line.replace(",", "#") + "\n" for line in lines]
        return self._store(str(path) if relation is None else relation, records)

    def _require_schema(self, relation: str) -> Schema:
        schema = self.catalog.find_schema(relation)
        if schema is None:
            raise DiskError(f"La relacion '{relation}' no existe en el esquema.")
        return schema

    def _require_sectors(self, relation: str) -> set[int]:
        ids = self.catalog.sectors_for(relation)
        if not ids:
            raise DiskError(
                f"No se encontraron sectores asociados a la relación '{relation}'."
            )
        return ids

    def _relation_lines(self, ids: set[int]) -> Iterator[str]:
        for sector in self.sectors():
            if sector.id in ids:
                yield from _lines_or_empty(sector.path)

    def select(self, relation: str) -> list[str]:
        """Records of a relation in physical order, fields separated by ``|``."""
        self._require_schema(relation)
        ids = self._require_sectors(relation)
        return [line.replace("#", "|") for line in self._relation_lines(ids)]

    def select_where(
        self,
        relation: str,
        attribute: str,
        operator: str,
        value: str,
        output: str,
    ) -> InsertResult:
        """Write matching records as CSV to ``output`` and store them as a new relation.

        Stored records are split as CSV lines, so a condition compares the
        field at the attribute's position within that split.
        """
        schema = self._require_schema(relation)
        try:
            position = schema.attributes.index(attribute)
        except ValueError as exc:
            raise DiskError(
                f"El atributo '{attribute}' no existe en la relación."
            ) from exc
        field_type = schema.types[position]
        ids = self._require_sectors(relation)

        out_path = self.workdir / output
        try:
            out = out_path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise DiskError("No se pudo abrir el archivo de salida.") from exc
        with out:
            for line in self._relation_lines(ids):
                fields = parse_csv_line(line)
                if len(fields) <= position:
                    continue
                try:
                    hit = matches(field_type, operator, fields[position], value)
                except ValueError as exc:
                    raise DiskError(str(exc)) from exc
                if hit:
                    out.write(line.replace("#", ",") + "\n")

        self.catalog.append_schema(Schema(output, schema.columns))
        return self.insert_rows(output, output)