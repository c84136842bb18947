"""Typed record generation script.

Reads a schema JSON file written by extract_schema.py and writes a Python
module of pydantic records matching it.

Usage:
    python scripts/generate_models.py data.json -o records.py
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bindery.strategies.template_engine import ExtractedSchema
from bindery.strategies.template_engine.codegen import render_models_source


def main() -> int:
    """Generate record classes from a schema document."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("schema", type=Path, help="Schema JSON file")
    parser.add_argument("-o", "--output", type=Path, default=Path("records.py"))
    args = parser.parse_args()

    if not args.schema.exists():
        print(f"Error: {args.schema} not found!", file=sys.stderr)
        return 1

    try:
        schema = ExtractedSchema.from_document(
            json.loads(args.schema.read_text(encoding="utf-8"))
        )
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Error reading schema: {e}", file=sys.stderr)
        return 1

    args.output.write_text(render_models_source(schema), encoding="utf-8")
    print(f"Records written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
