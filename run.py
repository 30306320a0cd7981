"""Dungeon Carver CLI entry point.

Provides subcommands for running the map HTTP server, printing a generated
map and listing the available algorithms. Accepts configuration via flags
and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()  # pragma: no cover
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _key_value(text: str):
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    key, value = text.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError(f"missing parameter name in {text!r}")
    return key, value.strip()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Carver

    Generate 2D tile maps (rooms, caves, mazes) from the command line or serve
    them over HTTP. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                      Bind address for the web server (default: 0.0.0.0)
          PORT                      Port for the web server (default: 5000)
          CARVER_LOG_LEVEL          debug, info, warn or error (default: info)
          CARVER_LOG_JSON           1 for JSON log lines
          CARVER_MAX_MAP_AREA       Largest width*height the server accepts (default: 250000)
          CARVER_MAX_ITERATIONS     Largest iteration count the server accepts (default: 1000000)
          CARVER_DEFAULT_ALGORITHM  Algorithm used by `generate` and `/api/maps` when none is given

        Examples:
          # Print a seeded 60x30 BSP dungeon
          python run.py generate bsp_tree --width 60 --height 30 --seed 42

          # Cellular automata cave with a denser fill and metrics
          python run.py generate cellular_automata --param fill_probability=55 --stats

          # List algorithms and their parameters
          python run.py list

          # Run the server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="carver",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Dungeon Carver {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the map HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve /api/maps/<algorithm> with Flask",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a map and print it as text rows",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument(
        "algorithm",
        nargs="?",
        default=None,
        help="Algorithm name (default: env CARVER_DEFAULT_ALGORITHM or bsp_tree)",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Map width in tiles")
    gen_parser.add_argument("--height", type=int, default=None, help="Map height in tiles")
    gen_parser.add_argument("--seed", default=None, help="Integer or text seed (default: random)")
    gen_parser.add_argument(
        "--param",
        dest="params",
        action="append",
        type=_key_value,
        default=[],
        metavar="KEY=VALUE",
        help="Algorithm parameter, repeatable (see `run.py list`)",
    )
    gen_parser.add_argument("--open-char", default=".", help="Character for open tiles (default: .)")
    gen_parser.add_argument("--blocked-char", default="#", help="Character for blocked tiles (default: #)")
    gen_parser.add_argument("--stats", action="store_true", help="Print generation metrics after the map")
    gen_parser.set_defaults(command="generate")

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List algorithms and their parameter defaults",
    )
    list_parser.set_defaults(command="list")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def _error(message: str) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {message}", file=sys.stderr)


def cmd_list() -> int:
    from carver.maps import algorithm_defaults

    for name, params in algorithm_defaults().items():
        print(label(name))
        if not params:
            print("  (no parameters)")
        for key, default in params.items():
            print(f"  {key:24} {value(default)}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    from carver.maps import MapGenerationError, build_generator, get_generator_class
    from carver.maps.rng import make_rng
    from carver.utils import coerce_seed

    algorithm = args.algorithm or os.getenv("CARVER_DEFAULT_ALGORITHM", "bsp_tree")
    try:
        seed = coerce_seed(args.seed)
        defaults = get_generator_class(algorithm).config_cls()
        params = dict(args.params)
        params.update(
            width=args.width if args.width is not None else defaults.width,
            height=args.height if args.height is not None else defaults.height,
            seed=seed,
        )
        generator = build_generator(algorithm, params, make_rng(seed))
    except MapGenerationError as e:
        _error(str(e))
        return 2

    grid = generator.create_map()
    for row in grid.to_rows(args.open_char, args.blocked_char):
        print(row)
    if args.stats:
        print()
        # pad before colouring so escape codes do not count toward the width
        print(f"{label('algorithm:'.ljust(14))} {value(algorithm)}")
        print(f"{label('seed:'.ljust(14))} {value(seed)}")
        for key, val in generator.metrics.items():
            print(f"{label((key + ':').ljust(14))} {value(val)}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    if mode == "list":
        return cmd_list()
    if mode == "generate":
        return cmd_generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from carver import server
    from carver.logging_utils import log

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Carver{Style.RESET_ALL}" if _COLOR_ENABLED else "Dungeon Carver"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    server.start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
