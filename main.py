#!/usr/bin/env python3
"""
List the prompts of a chat export JSON file in order.

Usage: python main.py export.json [--max-chars 100] [--responses] [--json]
"""

import argparse
import json
import logging
import sys

from src.chat_import import ChatImportError, LoadResult, load_chat_bytes, load_chat_file
from src.config import Config
from src.web.services.conversation_loader import build_display_entries, file_info


logger = logging.getLogger(__name__)

STDIN_NAME = 'stdin.json'


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid int value: {value!r}')
    if number < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1: {number}')
    return number


def parse_args(args=None):
    parser = argparse.ArgumentParser(
        description='Normalize a chat export JSON file into numbered prompt/response exchanges.',
    )
    parser.add_argument('file', help="Chat export JSON file ('-' reads stdin)")
    parser.add_argument(
        '-n', '--max-chars',
        type=positive_int,
        default=Config.PROMPT_LABEL_MAX_CHARS,
        help=f'Truncate prompt labels to N characters (default: {Config.PROMPT_LABEL_MAX_CHARS})',
    )
    parser.add_argument('-r', '--responses', action='store_true', help='Print each response as JSON under its prompt')
    parser.add_argument('--json', dest='as_json', action='store_true', help='Emit the exchange list as JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(args)


def load(path):
    if path == '-':
        return load_chat_bytes(sys.stdin.buffer.read(), STDIN_NAME)
    return load_chat_file(path)


def render_text(loaded: LoadResult, max_chars: int, with_responses: bool = False) -> str:
    info = file_info(loaded)
    lines = [f"File: {info['file_name']} | Conversations found: {info['conversation_count']}", ""]
    for entry in build_display_entries(loaded, max_chars=max_chars, include_responses=with_responses):
        lines.append(entry['label'])
        if with_responses:
            lines.extend('    ' + line for line in entry['response_json'].splitlines())
            lines.append("")
    return "\n".join(lines)


def render_json(loaded: LoadResult, max_chars: int) -> str:
    payload = {
        **file_info(loaded),
        'warnings': loaded.warnings,
        'exchanges': build_display_entries(loaded, max_chars=max_chars),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def main(args=None) -> int:
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        loaded = load(parsed.file)
    except ChatImportError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1

    for warning in loaded.warnings:
        logger.warning(warning)

    if parsed.as_json:
        print(render_json(loaded, parsed.max_chars))
    else:
        print(render_text(loaded, parsed.max_chars, with_responses=parsed.responses))
    return 0


if __name__ == "__main__":
    sys.exit(main())
