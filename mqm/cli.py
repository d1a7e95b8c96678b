#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Auto-MQM CLI - segment text, inspect bilingual files, run MQM analyses

Usage:
    mqm segment "Dr. Smith arrived. He left." --lang en
    mqm parse memory.tmx
    mqm analyze --file project.xlf
    mqm analyze --source "Hello world." --target "Bonjour le monde." \
        --source-lang en --target-lang fr
    mqm analyze --target "Texte à relire." --target-lang fr --mode monolingual
"""

import sys
import json
import asyncio
import argparse
from pathlib import Path

from config.constants import ANALYSIS_MODES, DEFAULT_MODE
from config.logging_config import set_console_level

from .exceptions import MQMError
from .file_parsers import parse_file
from .models import AnalysisMode, AnalysisRequest
from .pipeline import AnalysisPipeline
from .segmentation import segment_text


def print_json(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def read_text(value: str) -> str:
    """'-' reads stdin, '@path' reads a file, anything else is the text itself"""
    if value == "-":
        return sys.stdin.read()
    if value.startswith("@"):
        return Path(value[1:]).read_text(encoding="utf-8")
    return value


def cmd_segment(args):
    """Split text into segments"""
    segments = segment_text(read_text(args.text), args.lang)
    print_json([segment.text for segment in segments])
    return 0


def cmd_parse(args):
    """Show the segment pairs of a TMX/XLIFF file"""
    path = Path(args.file)
    if not path.exists():
        print(f"❌ File not found: {path}", file=sys.stderr)
        return 1

    pairs = parse_file(path.read_bytes(), args.type or path.name)
    print_json([pair.to_dict() for pair in pairs])
    return 0


def cmd_analyze(args):
    """Run an MQM analysis and print the result"""
    if not (args.file or args.source or args.target):
        print("❌ Nothing to analyze: give --file, --target or --source", file=sys.stderr)
        return 1
    if args.file and args.source:
        print("❌ --source can't be combined with --file", file=sys.stderr)
        return 1

    if args.file:
        path = Path(args.file)
        if not path.exists():
            print(f"❌ File not found: {path}", file=sys.stderr)
            return 1
        request = AnalysisRequest(
            file_buffer=path.read_bytes(),
            file_type=args.type or path.name,
            mode=AnalysisMode.parse(args.mode),
            model_id=args.model,
        )
    else:
        request = AnalysisRequest(
            source_text=read_text(args.source) if args.source else None,
            target_text=read_text(args.target) if args.target else None,
            source_lang=args.source_lang,
            target_lang=args.target_lang,
            mode=AnalysisMode.parse(args.mode),
            model_id=args.model,
        )

    try:
        pipeline = AnalysisPipeline.from_settings(model=args.model)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    async def run():
        try:
            return await pipeline.analyze(request)
        finally:
            await pipeline.close()

    result = asyncio.run(run())
    print_json(result.to_dict())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mqm",
        description="Auto-MQM translation quality analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Segment command
    segment_parser = subparsers.add_parser('segment', help='Split text into sentence segments')
    segment_parser.add_argument('text', help="Text, '-' for stdin or '@path' for a file")
    segment_parser.add_argument('--lang', '-l', default='en', help='Language code (default: en)')

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='List segment pairs of a TMX/XLIFF file')
    parse_parser.add_argument('file', help='TMX or XLIFF file')
    parse_parser.add_argument('--type', help='File type (default: from extension)')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Run an MQM analysis')
    source = analyze_parser.add_mutually_exclusive_group()
    source.add_argument('--file', '-f', help='TMX or XLIFF file')
    source.add_argument('--target', '-t', help="Target text, '-' for stdin or '@path'")
    analyze_parser.add_argument('--source', '-s', help="Source text (alone: monolingual), '-' for stdin or '@path'")
    analyze_parser.add_argument('--type', help='File type (default: from extension)')
    analyze_parser.add_argument('--source-lang', default='auto', help='Source language (default: auto)')
    analyze_parser.add_argument('--target-lang', default='auto', help='Target language (default: auto)')
    analyze_parser.add_argument('--mode', default=DEFAULT_MODE, choices=list(ANALYSIS_MODES), help='Analysis mode')
    analyze_parser.add_argument('--model', help='Model id (default: from settings)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        set_console_level("DEBUG")

    # Route to command handlers
    commands = {
        'segment': cmd_segment,
        'parse': cmd_parse,
        'analyze': cmd_analyze,
    }

    try:
        return commands[args.command](args)
    except MQMError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
