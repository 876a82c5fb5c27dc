"""Interactive menu for creating disks, inspecting them and querying stored relations."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from pathlib import Path
from typing import TextIO

from .disk import Disk, DiskError, InsertResult
from .geometry import DiskConfig


class _EndOfInput(Exception):
    """Raised when the input stream runs out while a value is expected."""


class _Console:
    """Whitespace separated token reader paired with an output stream."""

    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._tokens: deque[str] = deque()

    def write(self, text: str) -> None:
        self._stdout.write(text)

    def ask(self, prompt: str) -> str:
        self.write(prompt)
        self._stdout.flush()
        while not self._tokens:
            line = self._stdin.readline()
            if not line:
                raise _EndOfInput
            self._tokens.extend(line.split())
        return self._tokens.popleft()

    def ask_int(self, prompt: str) -> int | None:
        token = self.ask(prompt)
        try:
            return int(token)
        except ValueError:
            return None


_DIMENSION_PROMPTS = (
    "Cantidad de platos: ",
    "Superficies: ",
    "Pistas: ",
    "Bloques: ",
    "Sectores: ",
    "Tamano de sector(bytes): ",
)


def _create_disk(console: _Console, workdir: Path) -> None:
    name = console.ask("Nombre del disco: ")
    values = []
    for prompt in _DIMENSION_PROMPTS:
        value = console.ask_int(prompt)
        if value is None:
            console.write("\nValor invalido.\n")
            return
        values.append(value)
    config = DiskConfig(name, *values)
    Disk.create(config, workdir)
    console.write(f"\nDisco '{name}' creado exitosamente.\n")


def _load_disk(console: _Console, workdir: Path) -> Disk | None:
    while True:
        name = console.ask("\nIngrese el nombre del disco a usar: ")
        if (workdir / name).exists():
            break
        console.write("\nEl disco no existe. Intente de nuevo.\n")
    try:
        disk = Disk.load(name, workdir)
    except DiskError as exc:
        console.write(f"{exc}\n")
        return None
    console.write(f"Disco '{disk.name}' cargado con exito.\n")
    return disk


def _show_information(console: _Console, disk: Disk) -> None:
    if not disk.platters:
        console.write("\nNo hay un disco creado.\n")
        return
    config = disk.config
    while True:
        console.write("\n--- Caracteristicas de Disco ---\n")
        console.write("1. Cantidad de Partes\n")
        console.write("2. Capacidad total del disco\n")
        console.write("3. Espacio ocupado y libre\n")
        console.write("4. Volver al menu principal\n")
        option = console.ask_int("Opcion: ")
        if option == 1:
            console.write(f"\nPlatos: {len(disk.platters)}\n")
            console.write(f"Superficies por plato: {config.surfaces}\n")
            console.write(f"Pistas por superficie: {config.tracks}\n")
            console.write(f"Bloques por pista: {config.blocks}\n")
            console.write(f"Sectores por bloque: {config.sectors}\n")
        elif option == 2:
            console.write(f"\nCapacidad total (bytes): {disk.capacity()}\n")
        elif option == 3:
            used = disk.used_bytes()
            console.write(f"\nEspacio ocupado (bytes): {used}\n")
            console.write(f"Espacio libre (bytes): {disk.capacity() - used}\n")
        elif option == 4:
            return
        else:
            console.write("\nOpcion invalida.\n")


def _report_csv(console: _Console, result: InsertResult) -> None:
    if result.complete:
        console.write("Todos los registros han sido insertados.\n")
    else:
        console.write(
            f"Se insertaron {result.inserted} registros. Algunos registros no "
            "fueron insertados por falta de espacio.\n"
        )


def _report_rows(console: _Console, result: InsertResult) -> None:
    if result.complete:
        console.write(
            f"Todos los registros del archivo '{result.relation}' fueron "
            "insertados correctamente.\n"
        )
    else:
        console.write(
            f"Se insertaron {result.inserted} registros del archivo "
            f"'{result.relation}'. Algunos no fueron insertados por falta de espacio.\n"
        )


def _conditional_query(console: _Console, disk: Disk) -> None:
    relation = console.ask("\nNombre de la relacion: ")
    attribute = console.ask("Atributo a comparar: ")
    operator = console.ask("Operador de condicion: ")
    value = console.ask("Valor para comparar: ")
    output = console.ask("Guardar en archivo (nombre): ")
    try:
        result = disk.select_where(relation, attribute, operator, value, output)
    except DiskError as exc:
        console.write(f"{exc}\n")
        return
    console.write(
        "\nConsulta condicional completada. Resultados guardados en "
        f"'{output}'.\n"
    )
    console.write(f"Nueva relacion '{output}' agregada al esquema.\n")
    _report_rows(console, result)


def _records_menu(console: _Console, disk: Disk) -> None:
    if not disk.platters:
        console.write("Primero debe crear un disco.\n")
        return
    while True:
        console.write("\n--- Submenu de Insercion ---\n")
        console.write("1. Agregar registro completo\n")
        console.write("2. Realizar consulta simple (SELECT)\n")
        console.write("3. Realizar consulta con condicion (WHERE)\n")
        console.write("4. Volver al menu principal\n")
        option = console.ask_int("Opcion: ")
        if option == 1:
            csv_name = console.ask("\nIngrese el nombre del archivo CSV: ")
            try:
                _report_csv(console, disk.insert_csv(csv_name))
            except DiskError as exc:
                console.write(f"\n{exc}\n")
        elif option == 2:
            relation = console.ask("Ingrese el nombre de la relacion: ")
            try:
                rows = disk.select(relation)
            except DiskError as exc:
                console.write(f"{exc}\n")
                continue
            console.write(f"\n--- Registros de la relación '{relation}' ---\n")
            for row in rows:
                console.write(row + "\n")
        elif option == 3:
            _conditional_query(console, disk)
            return
        elif option == 4:
            return
        else:
            console.write("\nOpcion invalida.\n")


def run(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    workdir: str | Path | None = None,
) -> int:
    """Run the main menu until the user chooses to leave or input ends."""
    console = _Console(stdin or sys.stdin, stdout or sys.stdout)
    root = Path(workdir) if workdir is not None else Path.cwd()
    try:
        while True:
            console.write("===== MENU =====\n")
            console.write("1. Crear Disco\n")
            console.write("2. Consultar Informacion del Disco\n")
            console.write("3. Consultar Registros\n")
            console.write("0. Salir\n")
            option = console.ask_int("Opcion: ")
            if option == 1:
                _create_disk(console, root)
            elif option in (2, 3):
                disk = _load_disk(console, root)
                if disk is None:
                    continue
                if option == 2:
                    _show_information(console, disk)
                else:
                    _records_menu(console, disk)
            elif option == 0:
                break
            else:
                console.write("\nOpcion invalida.\n")
    except _EndOfInput:
        pass
    return 0


def main(argv: list[str] | None = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        prog="sectordisk", description="Simulated sector disk holding relations."
    )
    parser.add_argument(
        "-C",
        "--workdir",
        default=".",
        help="directory holding the disks and catalog files",
    )
    args = parser.parse_args(argv)
    return run(sys.stdin, sys.stdout, args.workdir)


if __name__ == "__main__":
    raise SystemExit(main())