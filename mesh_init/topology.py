from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from .errors import InvalidTopology, ParseError

DIM_NAMES = ("X", "Y", "Z")
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class MeshTopology:
    """
    Extents of a 3D mesh. Nodes are linearized row-major:
    i = x + y*X + z*X*Y (x fastest, then y, then z-layer).
    """

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        for name, val in zip(DIM_NAMES, (self.x, self.y, self.z)):
            if not isinstance(val, int) or isinstance(val, bool):
                raise InvalidTopology(f"{name} must be an integer, got {val!r}")
            if val < 1:
                raise InvalidTopology(f"{name} must be positive, got {val}")

    @property
    def xy(self) -> int:
        """Nodes per layer."""
        return self.x * self.y

    @property
    def node_count(self) -> int:
        return self.x * self.y * self.z

    def index(self, x: int, y: int, z: int) -> int:
        if not (0 <= x < self.x and 0 <= y < self.y and 0 <= z < self.z):
            raise IndexError(f"coordinate out of range: ({x},{y},{z})")
        return x + y * self.x + z * self.xy

    def coords(self, i: int) -> Tuple[int, int, int]:
        self._bounds_check(i)
        z, rem = divmod(i, self.xy)
        y, x = divmod(rem, self.x)
        return x, y, z

    def layer_of(self, i: int) -> int:
        self._bounds_check(i)
        return i // self.xy

    def _bounds_check(self, i: int) -> None:
        if not (0 <= i < self.node_count):
            raise IndexError(f"node index out of range: {i}")

    def __str__(self) -> str:
        return f"(X,Y,Z) = ({self.x},{self.y},{self.z})"


# -------------------------- Resolution --------------------------
def parse_dimension(name: str, text) -> int:
    """Parse a base-10 dimension value; the sign is checked by MeshTopology."""
    if isinstance(text, bool):
        raise ParseError(f"{name} is not an integer: {text!r}")
    if isinstance(text, int):
        return text
    s = str(text).strip()
    # plain ASCII digits only: no "1_0", no non-ASCII numerals
    if not _DECIMAL_RE.fullmatch(s):
        raise ParseError(f"{name} is not an integer: {text!r}")
    return int(s, 10)


def topology_from_values(values: Sequence) -> MeshTopology:
    if len(values) != 3:
        raise ParseError(f"expected 3 dimensions (X Y Z), got {len(values)}")
    dims = [parse_dimension(n, v) for n, v in zip(DIM_NAMES, values)]
    return MeshTopology(*dims)


def prompt_topology(
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> MeshTopology:
    output_fn("input X Y Z")
    answers = [input_fn(f"{name} = ") for name in DIM_NAMES]
    return topology_from_values(answers)


def load_topology_config(path: str) -> MeshTopology:
    """
    Read a JSON config such as {"x": 4, "y": 4, "z": 2}.
    Upper-case keys are accepted as well.
    """
    try:
        cfg = json.loads(Path(path).read_text())
    except OSError as e:
        raise ParseError(f"cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"config {path} is not valid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise ParseError(f"config {path} must be a JSON object")

    values = []
    for name in DIM_NAMES:
        if name.lower() in cfg:
            values.append(cfg[name.lower()])
        elif name in cfg:
            values.append(cfg[name])
        else:
            raise ParseError(f"config {path} is missing dimension '{name.lower()}'")
    return topology_from_values(values)


def resolve_topology(
    dims: Optional[Sequence[str]] = None,
    config: Optional[str] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> MeshTopology:
    """
    Resolve mesh extents: three positional dims win, then a config file,
    then interactive prompts. Fewer than three dims falls back to prompting.
    """
    if dims and len(dims) == 3:
        topo = topology_from_values(dims)
    elif config:
        topo = load_topology_config(config)
    else:
        topo = prompt_topology(input_fn, output_fn)
    output_fn(str(topo))
    return topo
