"""Command-line front end.

    unitconvert convert "2 m" ft          -> 6.561679790026247 ft
    unitconvert convert "2 m" cm --value-only
    unitconvert compare "2 m" s           -> false
    unitconvert --define "football_field = 100 yd" convert "150 ft" football_field
    unitconvert units
    unitconvert serve --port 0
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from typing import Optional, Sequence

from unitconvert.config import settings
from unitconvert.core.engine import UnitEngine
from unitconvert.core.errors import UnitConvertError
from unitconvert.utils.units import format_magnitude

logger = logging.getLogger(__name__)


def find_free_port() -> int:
    """Find a free TCP port to avoid conflicts."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unitconvert",
        description="A command line application for doing unit conversions.",
    )
    parser.add_argument("--define", action="append", default=[], metavar="DEF",
                        help='extra unit definition, e.g. "football_field = 100 yd" (repeatable)')
    parser.add_argument("--definitions-file", metavar="PATH",
                        help="file with one unit definition per line")
    parser.add_argument("--log-level", default=settings.log_level, help="logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p_convert = sub.add_parser("convert", help="convert a quantity to another unit")
    p_convert.add_argument("quantity", help='quantity to convert, e.g. "2 m"')
    p_convert.add_argument("to_unit", help="unit to convert to")
    p_convert.add_argument("--value-only", action="store_true", help="only print the value")
    p_convert.add_argument("--precision", type=int, default=settings.output_precision,
                           help="significant digits (default: shortest round-trip)")

    p_compare = sub.add_parser("compare", help="check whether two units share a dimension")
    p_compare.add_argument("a")
    p_compare.add_argument("b")

    p_units = sub.add_parser("units", help="list registered units")
    p_units.add_argument("symbol", nargs="?", help="describe a single unit")

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000, help="0 picks a free port")
    return parser


def _make_engine(args: argparse.Namespace) -> UnitEngine:
    engine = UnitEngine.create(settings)
    if args.definitions_file:
        engine.registry.load_file(args.definitions_file)
    for definition in args.define:
        engine.add_unit_definition(definition)
    return engine


def _serve(engine: UnitEngine, host: str, port: int) -> int:
    import uvicorn

    from unitconvert.api.deps import get_engine
    from unitconvert.main import app

    # serve the engine built from the command line, extra definitions included
    app.dependency_overrides[get_engine] = lambda: engine
    port = port or find_free_port()
    print(f"Starting UnitConvert on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        engine = _make_engine(args)
        if args.command == "serve":
            return _serve(engine, args.host, args.port)
        if args.command == "convert":
            if args.value_only:
                value = engine.get_magnitude_in_unit(args.quantity, args.to_unit)
                print(format_magnitude(value, args.precision))
            else:
                engine.output_precision = args.precision
                print(engine.unit_convert_string(args.quantity, args.to_unit))
        elif args.command == "compare":
            print("true" if engine.have_same_dimensions(args.a, args.b) else "false")
        elif args.command == "units":
            if args.symbol:
                for key, value in engine.describe_unit(args.symbol).items():
                    print(f"{key}: {value}")
            else:
                print("\n".join(engine.registry.symbols()))
    except (UnitConvertError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
