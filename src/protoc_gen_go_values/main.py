from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, List, Mapping, Optional

from protoc_gen_go_values import __version__
from protoc_gen_go_values.config import PluginConfig
from protoc_gen_go_values.errors import ValueSlicesError
from protoc_gen_go_values.plugin import (
    PLUGIN_NAME,
    error_response,
    parse_request,
    process_request,
    serialize_response,
)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PLUGIN_NAME,
        description=(
            "protoc plugin: runs protoc-gen-go, then turns annotated repeated "
            "message fields into value slices. Reads a CodeGeneratorRequest "
            "on stdin and writes a CodeGeneratorResponse on stdout."
        ),
    )
    parser.add_argument("--base-plugin", help="Command of the base generator (default: protoc-gen-go)")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for the base generator")
    parser.add_argument("--workers", type=int, help="Threads used to transform generated files")
    parser.add_argument("--verbose", action="store_true", default=None, help="Print diagnostics to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def run(
    stdin: BinaryIO,
    stdout: BinaryIO,
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Handle one protoc invocation.

    Failures are reported through the response's error field; protoc expects
    the plugin to exit with status 0 in that case.
    """
    args = _parse_args(argv)
    try:
        config = PluginConfig.from_env(environ).with_overrides(
            base_plugin=args.base_plugin,
            timeout=args.timeout,
            workers=args.workers,
            verbose=args.verbose,
        )
        request = parse_request(stdin.read())
        response = process_request(request, config)
        output = serialize_response(response)
    except ValueSlicesError as e:
        print(f"{PLUGIN_NAME}: {e}", file=sys.stderr)
        output = error_response(str(e)).SerializeToString()

    stdout.write(output)
    stdout.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(run(sys.stdin.buffer, sys.stdout.buffer, argv))


if __name__ == "__main__":
    main()
