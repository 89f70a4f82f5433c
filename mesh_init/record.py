from __future__ import annotations

import warnings
from dataclasses import dataclass, fields
from typing import Dict, List, Sequence

from myhdl import bin, intbv

# -------------------------- Field widths --------------------------
EX_WIDTH = 14
WV_WIDTH = 10
CF_WIDTH = 10
PN_WIDTH = 4
DATA_WIDTH = 72  # BRAM word width

# -------------------------- Init-time codes --------------------------
PENALTY = 7          # directional cost for an existing link
EX_TERMINAL = 16379  # top layer: no upward link (reserved terminal code)
EX_SOURCE = 10       # bottom layer: source injection
EX_DEFAULT = 0


@dataclass(frozen=True)
class Field:
    name: str
    width: int  # number of bits, not the end bit


# MSB first: ex occupies bits [71:58], cf_1 occupies bits [3:0]
RECORD_LAYOUT: List[Field] = [
    Field("ex",   EX_WIDTH),
    Field("wv",   WV_WIDTH),
    Field("cf_9", PN_WIDTH),
    Field("cf_7", CF_WIDTH),
    Field("cf_5", CF_WIDTH),
    Field("cf_3", CF_WIDTH),
    Field("cf_2", CF_WIDTH),
    Field("cf_1", PN_WIDTH),
]

if sum(f.width for f in RECORD_LAYOUT) != DATA_WIDTH:
    raise AssertionError("RECORD_LAYOUT does not add up to DATA_WIDTH")


@dataclass
class NodeRecord:
    """
    Routing/control word held in one BRAM FIFO entry.

    Only ex, cf_9, cf_2 and cf_1 are computed at init time; wv, cf_7, cf_5
    and cf_3 are left at 0 for the router to fill in at runtime.
    """

    ex: int = 0
    wv: int = 0
    cf_9: int = 0
    cf_7: int = 0
    cf_5: int = 0
    cf_3: int = 0
    cf_2: int = 0
    cf_1: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# -------------------------- Bit extraction --------------------------
def field_bits(value: int, width: int) -> int:
    """Low-order `width` bits of value (negative values wrap as two's complement)."""
    if width <= 0:
        return 0
    return int(intbv(value)[width:])


def bit_array(value: int, bit_width: int) -> str:
    """
    Render value as exactly `bit_width` binary digits, MSB first.

    High-order bits that do not fit are discarded, so bit_array(18, 4) is
    '0010'. No range check is done here; see pack_fields for the warning.
    """
    if bit_width <= 0:
        return ""
    return bin(field_bits(value, bit_width), bit_width)


# -------------------------- Packing --------------------------
def pack_fields(
    values: Dict[str, int],
    layout: Sequence[Field] = RECORD_LAYOUT,
    stacklevel: int = 2,
) -> intbv:
    """
    Pack named values into one word, first field of layout in the MSBs.
    `stacklevel` is handed to warnings.warn for truncated fields.
    """
    total = sum(f.width for f in layout)
    word = intbv(0)[total:]
    hi = total
    for f in layout:
        lo = hi - f.width
        raw = values.get(f.name, 0)
        bits = field_bits(raw, f.width)
        if bits != raw:
            warnings.warn(
                f"field {f.name}={raw} does not fit in {f.width} bits; "
                f"truncated to {bits}",
                UserWarning,
                stacklevel=stacklevel,
            )
        word[hi:lo] = bits
        hi = lo
    return word


def unpack_fields(word: int, layout: Sequence[Field] = RECORD_LAYOUT) -> Dict[str, int]:
    total = sum(f.width for f in layout)
    w = intbv(int(word))[total:]
    out: Dict[str, int] = {}
    hi = total
    for f in layout:
        lo = hi - f.width
        out[f.name] = int(w[hi:lo])
        hi = lo
    return out


def encode_record(rec: NodeRecord, stacklevel: int = 2) -> intbv:
    return pack_fields(rec.as_dict(), RECORD_LAYOUT, stacklevel=stacklevel + 1)


def decode_record(word: int) -> NodeRecord:
    return NodeRecord(**unpack_fields(word, RECORD_LAYOUT))


def record_bits(rec: NodeRecord) -> str:
    """72-character MSB-first binary literal of a record."""
    return bin(int(encode_record(rec, stacklevel=3)), DATA_WIDTH)
