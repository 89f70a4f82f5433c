"""
BRAM routing-memory initializer for a 3D mesh network-on-chip.

Given mesh extents (X, Y, Z) this package computes the initial 72-bit
routing/control word of every node's FIFO BRAM and writes them out as
Verilog-style initializer assignments:

    BRAM_FIFO_blk[<z>].FIFO.RAM.RAM[<j>] <= 72'b...;

Each word depends only on the node's linear index (x fastest, then y,
then z-layer); no per-packet behavior is modelled.
"""

__all__ = [
    "errors",
    "topology",
    "record",
    "generator",
    "writer",
    "runner",
]
