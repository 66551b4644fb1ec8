# parity2

Building blocks for working with PAR 2.0 parity archives, in pure Python
with no dependencies beyond the standard library.

## What is inside

- `parity2.md5`: an incremental MD5 implementation. `MD5Context` has
  `update`, `update_zeros` (feeds a run of zero bytes), `final`, `hash`
  (the current state without padding), `copy`, `reset` and a `byte_count`
  property. `MD5Hash` wraps a 16-byte digest; hashes are ordered with byte 15
  as the most significant byte, and `str()` gives the hex digits in that
  reversed byte order.
- `parity2.galois`: arithmetic in GF(2^8) (`Galois8`, generator 0x11D) and
  GF(2^16) (`Galois16`, generator 0x1100B), built on log/antilog tables
  (`GaloisTable`). Elements support `+`, `-`, `*`, `/`, `pow()` and `^` for
  integer powers, plus `log()` and `alog()`. Dividing by zero raises
  `ZeroDivisionError`.
- `parity2.par1fileformat`: PAR 1 file header and file entry records
  (`Par1FileHeader`, `Par1FileEntry`, `FileEntryStatus`, `PAR1_MAGIC`) with
  `pack()` and `unpack()` to and from their little-endian binary form.
- `parity2.libpar2`: the enumerations `Result`, `NoiseLevel` and `Scheme`,
  and `compute_recovery_file_count`, which raises `RecoveryFileCountError`
  when no count can be chosen.
- `parity2.paths`: `split_filename`, `split_relative_filename`,
  `get_canonical_pathname`, `find_files` (a single `*` with a fixed prefix
  and suffix, or any number of `?`), `file_exists`, `get_file_size`,
  `create_parent_directory` and `FileSizeCache`.
- `parity2.diskfile`: `DiskFile` for reads and writes at given offsets in a
  file created with a preset size, and `DiskFileMap` to track which file
  names are in use. Failures raise `DiskFileError`, a subclass of `OSError`.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Hashing data:

```python
from parity2.md5 import MD5Context

ctx = MD5Context()
ctx.update(b"hello ")
ctx.update(b"world")
print(ctx.final())
```

Galois field arithmetic:

```python
from parity2.galois import Galois16

a = Galois16(0x1234)
b = Galois16(0x00FF)
product = a * b
assert product / b == a
assert a - a == Galois16(0)
assert a ^ 3 == a * a * a
```

Planning recovery files:

```python
from parity2.libpar2 import Scheme, compute_recovery_file_count

assert compute_recovery_file_count(Scheme.VARIABLE, 64, 4, 4) == 7
```

Reading and writing at offsets (`create` refuses a name that already
exists):

```python
from parity2.diskfile import DiskFile

with DiskFile() as out:
    out.create("data.bin", 11)
    out.write(6, b"world")
    out.write(0, b"hello ")

with DiskFile() as src:
    src.open("data.bin")
    assert src.read(0, 11) == b"hello world"
```

A closed `DiskFile` can be moved with `rename(new_name)`, or with
`rename()` to the first free `name.1`, `name.2`, ...; `delete()` removes it.

Finding files:

```python
from parity2.paths import find_files

for name in find_files(".", "input?.txt", False):
    print(name)
```

## What it does not do

This package holds the pieces listed above and nothing more. It has no
command-line tool, and it does not create, verify or repair PAR 2.0 or
PAR 1 recovery sets: there is no packet reading or writing beyond the PAR 1
records, and no Reed-Solomon encoder or decoder built on the Galois types.