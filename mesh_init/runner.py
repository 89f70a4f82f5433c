from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .errors import MeshInitError
from .generator import generate_records
from .topology import resolve_topology
from .writer import DEFAULT_OUTPUT, write_init_file


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Generate BRAM routing-memory init values for a 3D mesh",
    )
    ap.add_argument("dims", nargs="*", metavar="N", help="Mesh extents X Y Z (prompted for if not all given)")
    ap.add_argument("--config", "-c", type=str, default=None, help="JSON file with x, y, z mesh extents")
    ap.add_argument("--out", "-o", type=str, default=DEFAULT_OUTPUT, help="Where to write the init dump")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        topo = resolve_topology(args.dims, args.config)
        records = generate_records(topo)
        write_init_file(topo, records, args.out)
    except MeshInitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
