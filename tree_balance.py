"""Command line demonstration of ``OrderedTree`` balancing behaviour.

The script builds a tree from a reproducible batch of random integers, shows
its shape and traversals, skews it by inserting keys larger than anything it
holds, and finally rebalances it.  Each stage prints the sideways rendering
from :func:`ordered_tree.render_tree` together with the balance status so the
effect of :meth:`OrderedTree.rebalance` can be inspected directly.

Randomness is seeded so repeated runs print identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
import argparse
import logging
import random
from typing import Callable, Iterator, List, Sequence, Tuple

from ordered_tree import OrderedTree, render_tree

logger = logging.getLogger(__name__)

DEFAULT_EXTRA: Tuple[int, ...] = (101, 105, 110)


@dataclass(frozen=True)
class DemoConfig:
    """Parameters controlling the demonstration run."""

    size: int = 15
    max_value: int = 100
    seed: int = 0
    extra: Tuple[int, ...] = DEFAULT_EXTRA

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("size must be non-negative")
        if self.max_value <= 0:
            raise ValueError("max_value must be positive")

    def sample(self) -> List[int]:
        """Return the seeded random input batch, duplicates included."""

        rng = random.Random(self.seed)
        return [rng.randrange(self.max_value) for _ in range(self.size)]


def _iter_traversals(
    tree: OrderedTree[int],
) -> Iterator[Tuple[str, Callable[[Callable[..., object]], None]]]:
    yield "Level order", tree.level_order
    yield "Pre order", tree.pre_order
    yield "Post order", tree.post_order
    yield "In order", tree.in_order


def _format_stage(title: str, tree: OrderedTree[int], *, traversals: bool) -> List[str]:
    """Return the output lines describing *tree* at one demo stage."""

    status = "Yes" if tree.is_balanced() else "No"
    lines = [
        f"{title}:",
        render_tree(tree.root),
        f"Is tree balanced? {status}",
    ]
    if traversals:
        for label, traverse in _iter_traversals(tree):
            collected: List[str] = []
            traverse(lambda node: collected.append(str(node.value)))
            lines.append(f"{label}: {' '.join(collected)}")
    return lines


def run_demo(config: DemoConfig) -> List[str]:
    """Execute the build / skew / rebalance sequence and return its report."""

    values = config.sample()
    logger.info("Sampled %d values with seed %d", len(values), config.seed)
    tree: OrderedTree[int] = OrderedTree(values)

    lines = _format_stage("Initial tree", tree, traversals=True)
    lines.append("")

    for value in config.extra:
        if not tree.insert(value):
            logger.info("Skipping duplicate value %d", value)
    lines.extend(_format_stage("Unbalanced tree", tree, traversals=False))
    lines.append("")

    tree.rebalance()
    lines.extend(_format_stage("Rebalanced tree", tree, traversals=True))
    return lines


def _parse_extra(payload: str) -> Tuple[int, ...]:
    try:
        return tuple(int(item) for item in payload.split(",") if item.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer list: {payload!r}") from exc


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for the balancing demonstration."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--size",
        type=int,
        default=DemoConfig.size,
        help="Number of random values to draw (duplicates are discarded).",
    )
    parser.add_argument(
        "--max-value",
        type=int,
        default=DemoConfig.max_value,
        help="Exclusive upper bound for the random values.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DemoConfig.seed,
        help="Seed for the random number generator.",
    )
    parser.add_argument(
        "--extra",
        type=_parse_extra,
        default=DEFAULT_EXTRA,
        help="Comma separated values inserted to unbalance the tree.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = DemoConfig(
            size=args.size,
            max_value=args.max_value,
            seed=args.seed,
            extra=args.extra,
        )
        lines = run_demo(config)
    except ValueError as exc:
        logger.error("Demo failed: %s", exc)
        return 1

    for line in lines:
        print(line)
    return 0


__all__ = [
    "DemoConfig",
    "main",
    "run_demo",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
