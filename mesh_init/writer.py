from __future__ import annotations

import os
import re
from typing import Callable, Iterator, Sequence, Tuple

from .errors import DumpWriteError
from .record import DATA_WIDTH, NodeRecord, decode_record, record_bits
from .topology import MeshTopology

DEFAULT_OUTPUT = "./init.dat"
BANNER_BEGIN = "// initial begin"
BANNER_END = "// end"

_LINE_RE = re.compile(
    r"BRAM_FIFO_blk\[(\d+)\]\.FIFO\.RAM\.RAM\[(\d+)\]\s*<=\s*(\d+)'b([01]+)\s*;"
)


def format_init_line(layer: int, j: int, rec: NodeRecord) -> str:
    return f"BRAM_FIFO_blk[{layer}].FIFO.RAM.RAM[{j}] <= {DATA_WIDTH}'b{record_bits(rec)};"


def _check_records(topo: MeshTopology, records: Sequence[NodeRecord]) -> None:
    if len(records) != topo.node_count:
        raise ValueError(
            f"expected {topo.node_count} records for {topo}, got {len(records)}"
        )


def iter_init_lines(topo: MeshTopology, records: Sequence[NodeRecord]) -> Iterator[str]:
    """Layer by layer, each layer in linear-in-layer order."""
    _check_records(topo, records)
    xy = topo.xy
    for layer in range(topo.z):
        for j in range(xy):
            yield format_init_line(layer, j, records[j + layer * xy])


def write_init_file(
    topo: MeshTopology,
    records: Sequence[NodeRecord],
    path: str = DEFAULT_OUTPUT,
    output_fn: Callable[[str], None] = print,
) -> int:
    """
    Write the BRAM initializer dump to `path` (truncated first).
    Returns the number of lines written. If the file cannot be opened it is
    left untouched; any later failure removes the partial file. OS errors
    are raised as DumpWriteError, anything else propagates unchanged.
    """
    _check_records(topo, records)
    n = 0
    output_fn(BANNER_BEGIN)
    try:
        f = open(path, "w")
    except OSError as e:
        raise DumpWriteError(f"cannot create {path}: {e}") from e
    try:
        with f:
            for line in iter_init_lines(topo, records):
                f.write(line + "\n")
                n += 1
    except OSError as e:
        _remove_partial(path)
        raise DumpWriteError(f"cannot write {path}: {e}") from e
    except BaseException:
        _remove_partial(path)
        raise
    output_fn(BANNER_END)
    return n


def _remove_partial(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        # already gone or not removable; the write error is reported instead
        pass


def parse_init_line(line: str) -> Tuple[int, int, NodeRecord]:
    """Read one dump line back into (layer, layer-local index, record)."""
    m = _LINE_RE.fullmatch(line.strip())
    if not m:
        raise ValueError(f"not a BRAM init line: {line!r}")
    layer, j, width, bits = int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4)
    if width != DATA_WIDTH or len(bits) != DATA_WIDTH:
        raise ValueError(f"expected a {DATA_WIDTH}-bit literal, got {width}'b with {len(bits)} digits")
    return layer, j, decode_record(int(bits, 2))
