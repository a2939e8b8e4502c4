#!/usr/bin/env python3
"""
weight - Entry Point

Calculates the total size of files matching glob patterns. Patterns may
contain '*', '?', character classes and recursive '**' components; a file
matched by several patterns is counted once in the total.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from tqdm import tqdm

from core.config import Config
from core.data_structures import RunReport
from core.exceptions import AllPatternsInvalidError
from core.size_scan import run_size_scan
from core.worker_pool import PROGRESS_EVERY, SIZING
from utils.file_utils import format_size, get_display_path
from utils.i18n import translator as t

EXIT_OK = 0
EXIT_FAILURE = 1


def print_debug_header(patterns):
    """Prints the working directory and checks it can be read."""
    try:
        cwd = str(Path.cwd())
    except OSError:
        cwd = t.get('unknown_directory')
    print(f"{t.get('current_directory')}: {cwd}", file=sys.stderr)
    print(f"{t.get('arguments')}: {list(patterns)}", file=sys.stderr)
    try:
        with os.scandir('.'):
            pass
        print(f"✓: {t.get('dir_readable')}", file=sys.stderr)
    except OSError as e:
        print(f"✗: {t.get('dir_unreadable', e)}", file=sys.stderr)


def print_no_files_help(debug: bool):
    print(t.get('no_files'))
    if not debug:
        print(t.get('debug_tip'))
        return
    print(f"\n{t.get('debug_suggestions')}")
    print(f"• {t.get('suggest_cwd', Path.cwd())}")
    print(f"• {t.get('suggest_location')}")
    print(f"• {t.get('suggest_ext')}")
    print(f"• {t.get('suggest_braces', '**/*.png **/*.jpg', '**/*.{png,jpg}')}")
    print(f"• {t.get('suggest_simple', '*.png', './**/*.png')}")
    print(f"• {t.get('suggest_perms', 'ls -la')}")


def print_text_report(report: RunReport, per_pattern: bool, verbose: bool, debug: bool):
    for rejected in report.rejected:
        print(t.get('warning_line', t.get('invalid_pattern', rejected.reason)), file=sys.stderr)

    result = report.result
    if result.file_count == 0 and not report.errors:
        print_no_files_help(debug)
        return

    if per_pattern:
        print(f"\n{t.get('per_pattern')}")
        for total in result.patterns:
            print(t.get('pattern_line', total.index + 1, total.pattern,
                        format_size(total.total_bytes), total.file_count))

    if verbose and report.errors:
        print(f"\n{t.get('skipped_entries')}", file=sys.stderr)
        for error in report.errors:
            print(f"  {get_display_path(Path(error.path))}: {error.reason}", file=sys.stderr)

    if report.cancelled:
        print(t.get('interrupted'), file=sys.stderr)

    print(f"\n{t.get('summary')}")
    print(f"{t.get('files_processed')}: {result.file_count}")
    if report.errors:
        print(f"{t.get('errors')}: {report.skipped_count}")
    print(f"{t.get('total_size')}: {format_size(result.total_bytes)}")


def print_json_report(report: RunReport):
    result = report.result
    data = {
        "total_bytes": result.total_bytes,
        "file_count": result.file_count,
        "patterns": [
            {
                "index": total.index,
                "pattern": total.pattern,
                "total_bytes": total.total_bytes,
                "file_count": total.file_count,
            }
            for total in result.patterns
        ],
        "errors": [error._asdict() for error in report.errors],
        "rejected": [error._asdict() for error in report.rejected],
    }
    print(json.dumps(data, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weight",
        description="Calculate total size of files matching glob patterns.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Examples:
  weight '**/*.png' '**/*.jpg' '**/*.dds'
  weight -v '*.png'
  weight --threads 4 '**/*.rs'
  weight --per-pattern 'src/**/*.py' 'tests/**/*.py' --output json

Quote the patterns so the shell does not expand them; brace expansion
such as '**/*.{png,jpg}' is not supported, pass separate patterns instead.
"""
    )
    parser.add_argument('patterns', nargs='+', help='Glob patterns (*, ?, [...], **)')
    parser.add_argument('-t', '--threads', type=int, help='Number of size-lookup threads (default: CPU count)')
    parser.add_argument('-v', '--verbose', action='store_true', help='List every sized file and skipped entry')
    parser.add_argument('-d', '--debug', action='store_true', help='Trace pattern compilation and traversal')
    parser.add_argument('-p', '--per-pattern', action='store_true', help='Show a subtotal for each pattern')
    case_group = parser.add_mutually_exclusive_group()
    case_group.add_argument('--case-sensitive', dest='case_sensitive', action='store_true', default=None,
                            help='Match names case-sensitively')
    case_group.add_argument('--ignore-case', dest='case_sensitive', action='store_false',
                            help='Match names case-insensitively')
    parser.add_argument('--no-follow-symlinks', dest='follow_symlinks', action='store_false', default=None,
                        help='Skip symbolic links instead of following them')
    parser.add_argument('--output', choices=['text', 'json'], default='text', help='Output format')
    parser.add_argument('--no-progress', action='store_true', help='Do not show a progress bar')
    parser.add_argument('--lang', choices=['en', 'de'], help='Set language for output')
    parser.add_argument('--save-config', action='store_true',
                        help='Store --threads, case, symlink and language choices as defaults')
    return parser


def progress_handler(progress_bar: tqdm):
    """Returns a progress_callback that advances the bar by each batch of sized files."""
    def on_progress(operation, details):
        if operation == SIZING:
            progress_bar.update(PROGRESS_EVERY)
        progress_bar.set_description_str(operation, refresh=False)
        progress_bar.set_postfix_str(details)
    return on_progress


def run_cli(args, config: Config) -> int:
    if args.save_config:
        if args.threads is not None:
            config.set('threads', args.threads)
        if args.case_sensitive is not None:
            config.set('case_sensitive', args.case_sensitive)
        if args.follow_symlinks is not None:
            config.set('follow_symlinks', args.follow_symlinks)
        if args.lang:
            config.set('language', args.lang)
        config.save_config()
        print(t.get('config_saved', config.config_file), file=sys.stderr)

    run_config = config.build_run_config(
        threads=args.threads,
        case_sensitive=args.case_sensitive,
        follow_symlinks=args.follow_symlinks,
        verbose=args.verbose,
        debug=args.debug,
    )

    if args.debug:
        print_debug_header(args.patterns)

    show_progress = (not args.no_progress and args.output == 'text'
                     and config.get('show_progress', True) and sys.stderr.isatty())
    progress_bar = tqdm(desc=t.get('scanning'), unit='file', file=sys.stderr,
                        disable=not show_progress, leave=False)

    try:
        report = run_size_scan(args.patterns, run_config, progress_callback=progress_handler(progress_bar))
    except AllPatternsInvalidError as e:
        progress_bar.close()
        for error in e.errors:
            print(t.get('error_line', t.get('invalid_pattern', error)), file=sys.stderr)
        print(t.get('all_invalid'), file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        progress_bar.close()
        print(f"\n{t.get('interrupted')}", file=sys.stderr)
        return EXIT_FAILURE
    progress_bar.close()

    if args.output == 'json':
        print_json_report(report)
    else:
        print_text_report(report, args.per_pattern, args.verbose, args.debug)

    if report.roots_resolved == 0:
        print(t.get('no_roots'), file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def main(argv=None, config: Config = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config or Config()

    lang = args.lang or config.get('language')
    if lang:
        t.set_language(lang)
    if args.threads is not None and args.threads < 1:
        parser.error(t.get('threads_positive'))

    return run_cli(args, config)


if __name__ == "__main__":
    sys.exit(main())
