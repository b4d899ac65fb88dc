"""
Score a product from the command line.

Examples:
    python main.py product.json
    cat product.json | python main.py --enrich
    python main.py product.json --category cosmetics --tables-dir ./my_tables
"""

import argparse
import asyncio
import json
import logging
import sys

from scoring.engine import ScoringEngine
from scoring.enrichment import NullEnricher, build_enricher
from scoring.errors import TableLoadError, ValidationError
from scoring.logging_setup import configure_logging
from scoring.tables.loader import TableRegistry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2


def read_product(path: str) -> dict:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Multi-domain product scoring engine (food, cosmetics, detergents)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('product', nargs='?', default='-',
                        help='Product JSON file ("-" or omitted reads stdin)')
    parser.add_argument('--category', choices=['food', 'cosmetics', 'detergents'],
                        help='Override the category declared in the product file')
    parser.add_argument('--enrich', action='store_true',
                        help='Ask the configured LLM for a narrative insight')
    parser.add_argument('--tables-dir', type=str,
                        help='Directory holding food.json, cosmetics.json, detergents.json')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        data = read_product(args.product)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read product: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.category and isinstance(data, dict):
        data["category"] = args.category

    try:
        registry = TableRegistry(directory=args.tables_dir)
    except TableLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    enricher = build_enricher() if args.enrich else NullEnricher()
    engine = ScoringEngine(registry=registry, enricher=enricher)

    try:
        if args.enrich:
            result = asyncio.run(engine.analyze_async(data))
        else:
            result = engine.analyze(data)
    except ValidationError as e:
        print(json.dumps({"error": "validation_error", **e.to_dict()}, ensure_ascii=False), file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(json.dumps(result.to_json(), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
