"""
Main CLI interface for twd-mcp.

Runs the stdio tool server and offers one-shot commands that read
recording data from a JSON file (or stdin) and print the generated code.
"""

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import Any, List, Optional

from . import __version__
from .core.config import Config
from .core.exceptions import TwdMcpError
from .core.logging_config import setup_logging
from .mcp.tools import call_tool, list_tools


def _load_json(source: str) -> Any:
    """Read JSON from a file path, or from stdin when source is '-'."""
    if source == "-":
        return json.load(sys.stdin)

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _run_tool(tool_name: str, arguments: Any, output: Optional[str] = None) -> int:
    """Call a tool and print (or write) its result."""
    result = call_tool(tool_name, arguments)
    if result.is_error:
        print(f"❌ {result.text}", file=sys.stderr)
        return 1

    if output:
        Path(output).write_text(result.text + "\n", encoding="utf-8")
        print(f"✅ Wrote {output}", file=sys.stderr)
    else:
        print(result.text)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the stdio tool server."""
    from .mcp.server import serve

    serve(args.config)
    return 0


def cmd_selectors(args: argparse.Namespace) -> int:
    """Suggest selectors for an element description."""
    return _run_tool("suggestSelectors", _load_json(args.input), args.output)


def cmd_mocks(args: argparse.Namespace) -> int:
    """Generate mock handlers from captured network requests."""
    data = _load_json(args.input)
    if isinstance(data, list):
        data = {"requests": data}
    return _run_tool("generateMocksFromNetwork", data, args.output)


def cmd_test(args: argparse.Namespace) -> int:
    """Generate a test file from a browser recording."""
    data = _load_json(args.input)
    if isinstance(data, list):
        data = {"interactions": data}
    if args.name and isinstance(data, dict):
        data["testName"] = args.name
    return _run_tool("generateTestFromRecording", data, args.output)


def cmd_tools(args: argparse.Namespace) -> int:
    """List available tools."""
    for definition in list_tools():
        print(f"{definition.name}")
        print(f"    {definition.description}")
        if args.verbose:
            print(json.dumps(definition.input_schema, indent=2))
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"twd-mcp {__version__}")

    if args.verbose:
        print()
        print("System Information:")
        print(f"  Python: {sys.version}")
        print(f"  Platform: {sys.platform}")
        print(f"  Log Level: {args.config.log_level}")
        print(f"  Log Format: {args.config.log_format}")

    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="twd-mcp",
        description="twd-mcp - Generate TWD tests from browser recordings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  twd-mcp serve
  twd-mcp selectors element.json
  twd-mcp mocks requests.json
  cat recording.json | twd-mcp test - --name "checkout flow" --output checkout.twd.test.ts
        """,
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--log-level",
        help="Override log level (DEBUG, INFO, WARN, ERROR)",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        help="Path to a YAML or JSON configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the stdio tool server")
    serve_parser.set_defaults(func=cmd_serve)

    for name, func, help_text in [
        ("selectors", cmd_selectors, "Suggest selectors for an element (JSON)"),
        ("mocks", cmd_mocks, "Generate mock handlers from network requests (JSON)"),
        ("test", cmd_test, "Generate a test file from a recording (JSON)"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Path to the JSON input, or '-' for stdin")
        sub.add_argument("--output", "-o", help="Write the result to this file")
        if name == "test":
            sub.add_argument("--name", help="Name for the generated test")
        sub.set_defaults(func=func)

    tools_parser = subparsers.add_parser("tools", help="List available tools")
    tools_parser.set_defaults(func=cmd_tools)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def _load_config(parsed_args: argparse.Namespace) -> Config:
    if parsed_args.config_file:
        config = Config.from_file(Path(parsed_args.config_file))
    else:
        config = Config.from_env()

    if parsed_args.log_level:
        config.log_level = parsed_args.log_level.upper()

    config.validate()
    return config


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_main_parser()

    if args is None:
        args = sys.argv[1:]

    parsed_args = parser.parse_args(args)

    if not hasattr(parsed_args, "func"):
        parser.print_help()
        return 1

    try:
        parsed_args.config = _load_config(parsed_args)
        setup_logging(parsed_args.config, str(uuid.uuid4()))
        return parsed_args.func(parsed_args)
    except TwdMcpError as e:
        print(f"❌ twd-mcp error: {e.message}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
