"""Velm CLI entry point.

Allows running via `python -m velm` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Optional

from .errors import VelmError
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: velm [--version | --keytest | FILE]"


def run_keyboard_test() -> None:
    """Print every parsed key press until Esc is pressed."""
    from .keyboard import KeyPressed, KeyType, key_name
    from .terminal import BlessedCanvas

    print("Keyboard test mode -- press keys to see parsed events.")
    print("Quit with ESC.")

    with BlessedCanvas() as canvas:
        while True:
            for event in canvas.read_events():
                if not isinstance(event, KeyPressed):
                    continue
                if event.key.key_type == KeyType.ESC:
                    return
                print(key_name(event.key), end="\r\n", flush=True)


def open_document(file_name: str):
    """Open ``file_name``, or start an empty document with that name."""
    from .document import Document

    if not os.path.exists(file_name):
        logger.info("%s does not exist, starting a new document", file_name)
        return Document(file_name=file_name)
    return Document.open(file_name)


def run_editor(file_name: Optional[str]) -> None:
    from .editor import Editor
    from .settings import configure_logging, load_settings
    from .terminal import BlessedCanvas

    settings = load_settings()
    log_file = configure_logging(settings)
    logger.info("Starting velm %s, logging to %s", get_version_string(), log_file)

    document = open_document(file_name) if file_name else None
    with BlessedCanvas() as canvas:
        editor = Editor(canvas, document=document, settings=settings)
        asyncio.run(editor.consume(canvas.events()))


def _report(error: VelmError) -> None:
    print(f"velm: {error}", file=sys.stderr)
    cause = error.__cause__
    while cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ("--keytest", "--keyboard-test"):
        run_keyboard_test()
        return
    if len(args) > 1 or (args and args[0].startswith("-")):
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    try:
        run_editor(args[0] if args else None)
    except VelmError as e:
        logger.exception("Editor stopped with an error")
        _report(e)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
