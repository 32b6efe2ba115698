"""CLI entry point for the synthetic transaction generator.

Usage:
    python -m generators.cli --config configs/transactions.yaml --seed 42 --count 1000
    python -m generators.cli --count 200 --output file --output-file output/transactions.jsonl
"""

import argparse
import sys
from pathlib import Path

import yaml

from .transaction_generator import TransactionGenerator


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Synthetic card transaction generator")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--count", type=int, default=100, help="Number of transactions")
    parser.add_argument(
        "--output",
        type=str,
        default="stdout",
        choices=["stdout", "file"],
        help="Output destination",
    )
    parser.add_argument("--output-file", type=str, default=None, help="Output file path")

    args = parser.parse_args(argv)

    config = {}
    if args.config:
        with open(args.config) as f:
            config = yaml.safe_load(f) or {}

    gen = TransactionGenerator(config=config, seed=args.seed)
    transactions = gen.generate(num_transactions=args.count)

    if args.output == "stdout":
        for txn in transactions:
            print(txn.model_dump_json())
    else:
        output_path = args.output_file or "output/transactions.jsonl"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            for txn in transactions:
                f.write(txn.model_dump_json() + "\n")
        print(f"Wrote {len(transactions)} transactions to {output_path}", file=sys.stderr)

    print(f"Generated {len(transactions)} transactions", file=sys.stderr)


if __name__ == "__main__":
    main()
