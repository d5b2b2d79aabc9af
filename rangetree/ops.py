from dataclasses import dataclass
from functools import partial
import math
from typing import Any, Callable, Dict, Iterable, List

from rangetree.maths import gcd, mod_add, MOD
from rangetree.segment_tree import SegmentTree


def parse_int(token: str) -> int:
    return int(token, 0)


def parse_set(token: str) -> frozenset:
    if token in ("", "-"):
        return frozenset()
    return frozenset(int(item, 0) for item in token.split(","))


def format_value(value: Any) -> str:
    if isinstance(value, frozenset):
        return ",".join(str(item) for item in sorted(value)) or "-"
    return str(value)


@dataclass(frozen=True)
class Operator:
    """A combining function together with its identity element.

    ``parse`` converts a command-line token into a value of the right type.
    Range updates only produce correct aggregates for ``idempotent``
    operators, where combining a value into every element of a range equals
    combining it once into the range's aggregate.
    """

    name: str
    op: Callable[[Any, Any], Any]
    default: Any
    parse: Callable[[str], Any] = parse_int
    idempotent: bool = False

    def check(self, samples: Iterable[Any]) -> None:
        """Raises ValueError unless ``default`` is an identity for ``samples``."""
        for sample in samples:
            if self.op(sample, self.default) != sample:
                raise ValueError(
                    f"{self.name}: {self.default!r} is not a right identity "
                    f"for {sample!r}"
                )
            if self.op(self.default, sample) != sample:
                raise ValueError(
                    f"{self.name}: {self.default!r} is not a left identity "
                    f"for {sample!r}"
                )

    def make_tree(self, n: int, lazy: bool = False) -> SegmentTree:
        return SegmentTree(n, self.default, self.op, lazy=lazy)


def _modsum(modulus: int, a: int, b: int) -> int:
    return mod_add(a % modulus, b % modulus, modulus)


def _union(a: frozenset, b: frozenset) -> frozenset:
    return a | b


def make_modsum(name: str = "modsum", modulus: int = MOD) -> Operator:
    if modulus < 1:
        raise ValueError(f"Modulus must be positive: {modulus}")
    return Operator(name, partial(_modsum, modulus), 0)


KIND2FACTORY: Dict[str, Callable[..., Operator]] = {
    "max": lambda name: Operator(name, max, -math.inf, idempotent=True),
    "min": lambda name: Operator(name, min, math.inf, idempotent=True),
    "sum": lambda name: Operator(name, lambda a, b: a + b, 0),
    "modsum": make_modsum,
    "gcd": lambda name: Operator(name, gcd, 0, idempotent=True),
    "union": lambda name: Operator(
        name, _union, frozenset(), parse_set, idempotent=True
    ),
}

_registry: Dict[str, Operator] = {}


def register(operator: Operator) -> None:
    _registry[operator.name] = operator


def get_operator(name: str) -> Operator:
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"Unknown operator: {name}") from None


def operator_names() -> List[str]:
    return sorted(_registry)


def make_operator(name: str, kind: str, **kwargs) -> Operator:
    try:
        factory = KIND2FACTORY[kind]
    except KeyError:
        raise ValueError(f"Unsupported operator kind: {kind}") from None
    return factory(name, **kwargs)


for _kind in KIND2FACTORY:
    register(make_operator(_kind, _kind))
