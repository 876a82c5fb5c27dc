# sectordisk

`sectordisk` simulates a hard disk on your file system. The disk is made of
platters, surfaces, tracks, blocks and sectors. Each sector is a small text
file with a fixed byte capacity. You can load CSV files into the disk as
relations. You can then list a relation or filter it with a simple condition.

## Installation

```
pip install .
```

## Interactive use

```
sectordisk              # work in the current directory
sectordisk -C data      # keep disks and catalog files in ./data
```

The menu reads whitespace-separated answers from standard input. It stops
when you choose `0` or when input ends.

1. **Crear Disco**: asks for a name, then the number of platters, surfaces,
   tracks, blocks and sectors, and the sector size in bytes. It creates
   `<name>/Plato1/Superficie1/Pista1/Bloque1/Sector1.txt` and the other
   sector files, all empty. It also appends the geometry to
   `discos-config.txt`.
2. **Consultar Informacion del Disco**: asks for a disk name, which must be
   an existing directory. It can then show how many parts the disk has, its
   total capacity, and the bytes used and free.
3. **Consultar Registros**: asks for a disk name, then offers three actions.
   You can insert a CSV file. You can list a relation (`SELECT`). You can
   filter a relation (`WHERE`), which returns to the main menu afterwards.

## Files in the working directory

- `discos-config.txt`: one line per disk,
  `name,platters,surfaces,tracks,blocks,sectors,sector_bytes`
- `esquema.txt`: one line per relation, `name#attr#type#attr#type...`
- `metadata.txt`: the sector ids each relation uses, `name:1,2,3`, sorted
  by relation name

## How records are stored

- A CSV file becomes a relation. Its name is the file name up to the first
  dot, so `people.csv` becomes `people`.
- The first line of the file is the header. Column types come from the first
  data row: `bool`, `int`, `float` or `string`.
- Fields may be quoted with `"`, and `""` inside quotes stands for a literal
  quote. Each record is written with `#` between its fields and ends with a
  newline.
- Records go into sectors in physical order. A relation skips every sector
  that `metadata.txt` already gives to some relation.
- A record is never split across two sectors. Once a record does not fit, the
  records after it are not written either.

## Queries

- `SELECT` prints each record of a relation with `|` between its fields.
- `WHERE` compares one attribute with a value using `==`, `!=`, `<`, `<=`,
  `>` or `>=`.
  - `int` and `float` columns accept all six operators. Floats are compared
    at single precision.
  - `string` columns accept only `==` and `!=`.
  - `bool` columns never match.
  - The matching records are written as comma-separated lines to the output
    file you name. That file is then stored as a new relation with the same
    schema.
  - Stored records are split at commas when the condition is checked, not at
    `#`. In practice, only the first attribute of a relation can be compared
    reliably.

## Library use

```python
from pathlib import Path
from sectordisk.geometry import DiskConfig
from sectordisk.disk import Disk

workdir = Path("data")
workdir.mkdir(exist_ok=True)
disk = Disk.create(DiskConfig("demo", 1, 2, 2, 2, 4, 512), workdir)

# Paths are taken relative to the working directory: this reads data/people.csv
result = disk.insert_csv("people.csv")
print(result.inserted, result.total, result.complete, result.sectors)

for line in disk.select("people"):
    print(line)

disk.select_where("people", "id", ">=", "30", "adults")   # writes data/adults
print(disk.capacity(), disk.used_bytes(), disk.free_bytes())
```

You can reopen an existing disk with `Disk.load("demo", workdir)`. Failures
raise `sectordisk.disk.DiskError`. Examples are an unknown disk, relation or
attribute, an unreadable or empty CSV file, and a number that cannot be
parsed in a condition.

Other modules:

- `sectordisk.geometry`: `DiskConfig`, `build_platters` and `iter_sectors`.
- `sectordisk.records`: `infer_type`, `parse_csv_line` and `matches`.
- `sectordisk.catalog`: `Catalog` and `Schema`, for reading and writing the
  three catalog files.

## What it does not do

- There is no query language beyond the single-condition filter above.
- Records and relations cannot be updated or deleted.
- Inserting the same CSV file again appends a second schema line. The
  relation's sector list in `metadata.txt` is replaced with the sectors used
  by the latest insert.
- Nothing guards against two processes using the same working directory at
  once.