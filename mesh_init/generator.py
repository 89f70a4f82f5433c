from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .record import EX_DEFAULT, EX_SOURCE, EX_TERMINAL, PENALTY, NodeRecord
from .topology import MeshTopology


@dataclass(frozen=True)
class NodeFlags:
    """Link predicates of one node, derived from its linear index only."""

    has_north: bool  # not on the far Y edge of its layer
    has_upper: bool  # not in the top layer
    has_east: bool   # not on the far X edge of its row
    is_source: bool  # in the bottom layer (z == 0)


def node_flags(topo: MeshTopology, i: int) -> NodeFlags:
    xy = topo.xy
    return NodeFlags(
        has_north=(i % xy) < (xy - topo.x),
        has_upper=i < (topo.node_count - xy),
        has_east=(i % topo.x) < (topo.x - 1),
        is_source=i < xy,
    )


def make_record(topo: MeshTopology, i: int) -> NodeRecord:
    f = node_flags(topo, i)

    if not f.has_upper:
        ex = EX_TERMINAL
    elif f.is_source:
        ex = EX_SOURCE
    else:
        ex = EX_DEFAULT

    return NodeRecord(
        ex=ex,
        cf_9=PENALTY if f.has_north else 0,
        # cf_2 points the router at this node's upward link
        cf_2=i if f.has_upper else 0,
        cf_1=PENALTY if f.has_east else 0,
    )


def generate_records(topo: MeshTopology) -> List[NodeRecord]:
    """One record per node, indexed by linear node index."""
    return [make_record(topo, i) for i in range(topo.node_count)]
