import argparse
import logging
import sys

from flatdb import config
from flatdb.core import codec
from flatdb.core.storage import FlatFileStorage

TYPE_NAMES = {value_type.name.lower(): value_type for value_type in codec.ValueType}


def parse_value(type_name: str, text: str) -> codec.Value:
    """Build a value variant from its command-line spelling."""

    value_type = TYPE_NAMES[type_name]

    match value_type:
        case codec.ValueType.INT32 | codec.ValueType.INT64:
            raw: object = int(text, 0)
        case codec.ValueType.FLOAT32 | codec.ValueType.FLOAT64:
            raw = float(text)
        case _:
            raw = text

    return codec.VARIANTS[value_type](raw)


def handle_get(storage: FlatFileStorage, args: argparse.Namespace) -> int:
    value = storage.get_value(args.key)

    print(f"{value.TYPE.name.lower()} {value.value!r}")

    return 0


def handle_set(storage: FlatFileStorage, args: argparse.Namespace) -> int:
    storage.set(args.key, parse_value(args.type, args.value))
    storage.sync()

    print("OK")

    return 0


def handle_keys(storage: FlatFileStorage, _: argparse.Namespace) -> int:
    for key in storage.keys():
        print(key)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flatdb", description="Inspect and edit a flatdb store file.")
    parser.add_argument("path", help="Store file, created empty if missing")
    parser.add_argument("--strict", action="store_true", help="Reject files with undecodable rows")
    parser.add_argument("--sort-keys", action="store_true", help="Write directory rows sorted by key")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    get_parser = commands.add_parser("get", help="Print the type and value of a key")
    get_parser.add_argument("key")
    get_parser.set_defaults(handler=handle_get)

    set_parser = commands.add_parser("set", help="Set a key and write the file")
    set_parser.add_argument("key")
    set_parser.add_argument("type", choices=sorted(TYPE_NAMES))
    set_parser.add_argument("value")
    set_parser.set_defaults(handler=handle_set)

    keys_parser = commands.add_parser("keys", help="List keys in file order")
    keys_parser.set_defaults(handler=handle_keys)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for a single store file."""

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = config.Settings(
        load_policy=config.LoadPolicy.STRICT if args.strict else config.LoadPolicy.PERMISSIVE,
        sort_keys=args.sort_keys,
    )

    try:
        storage = FlatFileStorage.open(args.path, settings=settings)

        return args.handler(storage, args)
    except (config.FlatDBError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)

        return 1


if __name__ == "__main__":
    sys.exit(main())
