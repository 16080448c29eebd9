"""CLI entry point for docx-quiz.

Usage:
  python -m docx_quiz serve [--port PORT] [--host HOST]
  python -m docx_quiz parse FILE
"""
from __future__ import annotations

import sys
from pathlib import Path

from docx_quiz.config import Settings, load_settings

COMMANDS = ("serve", "parse")


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "parse":
        _parse(args[1:])
    else:
        print(f"Unknown command: {command}")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)


def server_address(args: list[str], settings: Settings) -> tuple[str, int]:
    """--host/--port from the command line, falling back to config.json."""
    opts = dict(zip(args[::2], args[1::2]))
    host = opts.get("--host", settings.host)
    try:
        port = int(opts.get("--port", settings.port))
    except ValueError:
        print(f"Invalid port: {opts['--port']}")
        sys.exit(1)
    return host, port


def _serve(args: list[str]):
    import uvicorn

    settings = load_settings()
    host, port = server_address(args, settings)
    print(f"Starting Docx Quiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "docx_quiz.app:app",
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=5,
    )


def _parse(args: list[str]):
    if not args:
        print("Usage: python -m docx_quiz parse FILE")
        sys.exit(1)

    from docx_quiz.errors import ExtractionError
    from docx_quiz.parsers.qa_parser import parse_qa_file

    path = Path(args[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    try:
        pairs = parse_qa_file(path)
    except ExtractionError as e:
        print(f"Could not read {path.name}: {e}")
        sys.exit(1)

    for i, qa in enumerate(pairs, 1):
        print(f"{i:3d}. {qa.question}")
        print(f"     -> {qa.answer}")
    print(f"\n{len(pairs)} questions parsed from {path.name}")


if __name__ == "__main__":
    main()
