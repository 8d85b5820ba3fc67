"""Command-line interface for Caption Sync.

WHY: Caption files need checking before they ship with a video: does the
file parse, how many captions survive, what is on screen at 12:04? The
CLI answers those from the terminal, converts files to normalized
formats, and can replay a file against a simulated playback clock the way
the player samples it.

HOW: Uses argparse to accept a caption file and the action flags. The
file is read with read_caption_file() and parsed with
SubtitleDocument.load() (or parse_entries() under --strict). Status
messages go to stderr; listings, lookups and the follow replay go to
stdout; formatter outputs are saved next to the source (or to
--output-dir).

RULES:
- Positional argument: caption file path (.srt or .xml)
- Default action: list all entries, one per line
- --at SECONDS (repeatable): print the caption on screen at each time
- --formats: comma-separated formatter keys; files saved as {stem}{suffix},
  numeric suffix for conflicts (-captions-2.srt)
- --follow: replay the document on a clock ticking every POLL_INTERVAL_S
- --strict: a parse error fails the run instead of yielding no captions
- Exit codes: 0 = success, 1 = error
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from caption_sync.config import LOG_LEVEL, POLL_INTERVAL_S, SUPPORTED_EXTENSIONS
from caption_sync.core.errors import CaptionParseError, CaptionSourceError
from caption_sync.core.timecode import format_timecode
from caption_sync.document import SubtitleDocument, parse_entries, read_caption_file
from caption_sync.formatters import FORMATTERS
from caption_sync.formatters.base import FormatterOutput
from caption_sync.logging_setup import configure_logging

NO_CAPTION = "(no caption)"
LINE_JOIN = " / "


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may convert the same file several times. Overwriting a
    previous export would lose hand edits made to it.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode-captions.srt)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. episode-captions-2.srt)
    - Counter starts at 2 and increments

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _describe_entry(entry) -> str:
    return "{}\t{} --> {}\t{}".format(
        entry.sequence_index,
        format_timecode(entry.start_seconds),
        format_timecode(entry.end_seconds),
        entry.text(LINE_JOIN),
    )


def follow_playback(
    document: SubtitleDocument,
    interval_s: float = POLL_INTERVAL_S,
    speed: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Replay the document against a simulated playback clock.

    WHY: Reproduces what a viewer sees: the player samples the active
    caption every ``interval_s`` seconds of media time, so captions
    shorter than the interval can be skipped and changes appear on tick
    boundaries.

    HOW: Tick n samples media time n * interval_s and prints a line on
    the first tick and whenever the active entry differs from the previous
    tick's. Wall-clock waits are interval_s / speed.

    Returns:
        Number of caption changes printed.
    """
    changes = 0
    current = None
    tick = 0
    end = document.duration_seconds

    while True:
        position = tick * interval_s
        if position > end:
            break
        entry = document.entry_active_at(position)
        if tick == 0 or entry is not current:
            current = entry
            changes += 1
            text = entry.text(LINE_JOIN) if entry is not None else NO_CAPTION
            print("[{}] {}".format(format_timecode(position), text), flush=True)
        sleep(interval_s / speed)
        tick += 1

    return changes


def _load_document(path: Path, strict: bool) -> SubtitleDocument:
    try:
        text = read_caption_file(path)
    except CaptionSourceError as e:
        _fail(str(e))

    if strict:
        try:
            kind, entries = parse_entries(text)
        except CaptionParseError as e:
            _fail(str(e))
        return SubtitleDocument(entries, kind)

    document = SubtitleDocument.load(text)
    if document.error is not None:
        _status("Warning: {} (continuing without captions)".format(document.error))
    return document


def run(args: argparse.Namespace) -> None:
    """Execute the CLI actions selected by ``args``."""
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_EXTENSIONS))
        ))

    if args.speed <= 0:
        _fail("--speed must be positive")
    if args.interval <= 0:
        _fail("--interval must be positive")

    format_keys: List[str] = []
    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        for key in format_keys:
            if key not in FORMATTERS:
                _fail("Unknown format '{}'. Available formats: {}".format(
                    key, ", ".join(sorted(FORMATTERS.keys()))
                ))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if format_keys and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    document = _load_document(input_path, args.strict)
    _status("{}: {} entries ({}), {} long".format(
        input_path.name,
        len(document),
        document.format.value,
        format_timecode(document.duration_seconds),
    ))

    if args.at:
        for t in args.at:
            text = document.text_at(t, LINE_JOIN)
            print("{}\t{}".format(format_timecode(t), text if text is not None else NO_CAPTION))

    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(document):
            saved_path = _save_output(output, input_path.stem, output_dir)
            _status("  Saved {}: {}".format(formatter.name, saved_path.name))

    if args.follow:
        follow_playback(document, args.interval, args.speed, sleep=time.sleep)

    if not (args.at or format_keys or args.follow):
        for entry in document:
            print(_describe_entry(entry))


def _non_negative_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("not a number: {!r}".format(value))
    if seconds < 0:
        raise argparse.ArgumentTypeError("time cannot be negative: {}".format(value))
    return seconds


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="caption_sync",
        description="Parse SRT and XML transcript caption files, look up the caption "
                    "shown at a playback time, and export normalized formats.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the caption file (.srt or .xml).",
    )

    parser.add_argument(
        "--at",
        action="append",
        type=_non_negative_seconds,
        default=None,
        metavar="SECONDS",
        help="Print the caption on screen at this playback time. Can be given multiple times.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of export formats. "
             "Available: {}.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save exported files (default: same as input file).",
    )

    parser.add_argument(
        "--follow",
        action="store_true",
        help="Replay captions on a simulated playback clock.",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=POLL_INTERVAL_S,
        help="Playback sampling interval in seconds for --follow (default: %(default)s).",
    )

    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Replay speed multiplier for --follow (default: %(default)s).",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on parse errors instead of continuing without captions.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parser diagnostics to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else LOG_LEVEL)
    run(args)


if __name__ == "__main__":
    main()
