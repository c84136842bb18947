"""Schema extraction script.

Scans an annotated HTML template and writes the schema of the data it
expects as JSON.

Usage:
    python scripts/extract_schema.py templates/game.html -o data.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bindery.interfaces.template import BindingError
from bindery.strategies.template_engine import FileTemplateSource, SchemaExtractor


def main() -> int:
    """Extract the schema of a template file."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("template", type=Path, help="HTML template to scan")
    parser.add_argument("-o", "--output", type=Path, default=Path("data.json"))
    parser.add_argument(
        "--drop-empty",
        action="store_true",
        help="Leave out components without properties",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)-8s | %(message)s")

    try:
        document = FileTemplateSource(args.template, cache=False).load()
        schema = SchemaExtractor(include_empty=not args.drop_empty).extract(document)
    except BindingError as e:
        print(f"Error parsing HTML file: {e}", file=sys.stderr)
        return 1

    if schema is None:
        print("No data-component elements found", file=sys.stderr)
        return 1

    args.output.write_text(json.dumps(schema.to_document(), indent=4), encoding="utf-8")
    print(f"Schema successfully saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
