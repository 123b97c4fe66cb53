"""MCP Server for Whole-Body Vibration (WBV) analysis.

Run as a CLI:
    mcp-server-wbv

Or via Python:
    python -m mcp_server_wbv
"""

from __future__ import annotations

__version__ = "0.1.0"


def main() -> None:
    """CLI entry point for the WBV MCP server."""
    import argparse
    import logging
    import sys

    from mcp_server_wbv.config import LOG_LEVELS, Settings, parse_log_level

    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        prog="mcp-server-wbv",
        description="MCP server for whole-body vibration analysis (ISO 2631 weighting, VDV, MTVV)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=settings.log_level,
        help=f"Log level on stderr (default: {settings.log_level})",
    )
    args = parser.parse_args()

    # stdout carries the stdio transport
    logging.basicConfig(
        stream=sys.stderr,
        level=parse_log_level(args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from mcp_server_wbv.server import serve

    serve(transport=args.transport)


if __name__ == "__main__":
    main()
