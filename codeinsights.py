#!/usr/bin/env python3
"""codeinsights - command-line front end for the analysis pipeline

Compatible with Python 3.8+.

Usage examples:
  ./codeinsights.py examples/hello.c
  ./codeinsights.py --sample -l java --emit tac,quads
  ./codeinsights.py prog.cpp --json --save alice
  ./codeinsights.py --history alice
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from codeinsights.analyzer import LANGUAGES, Analyzer, language_for_path
from codeinsights.explain import ExplanationRequest, build_prompt
from codeinsights.history import HistoryError, HistoryStore
from codeinsights.report import SECTIONS, format_result
from codeinsights.samples import SAMPLE_CODE


def _parse_sections(text: str) -> List[str]:
    sections = [s.strip() for s in text.split(",") if s.strip()]
    for s in sections:
        if s not in SECTIONS:
            raise argparse.ArgumentTypeError(f"unknown section '{s}' (choose from {', '.join(SECTIONS)})")
    return sections


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    ap = argparse.ArgumentParser(prog="codeinsights", description="Code Insights source analyzer")
    ap.add_argument("source", nargs="?", help="Input source file ('-' for stdin)")
    ap.add_argument("-l", "--language", choices=LANGUAGES, help="Language tag (default: from extension, else c)")
    ap.add_argument("--sample", action="store_true", help="Analyze the built-in sample for the language")
    ap.add_argument("--emit", type=_parse_sections, default=list(SECTIONS),
                    help="Comma-separated sections: " + ",".join(SECTIONS))
    ap.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    ap.add_argument("--explain-prompt", action="store_true", help="Print the explanation prompt")
    ap.add_argument("--save", metavar="USER", help="Append the analysis to USER's history")
    ap.add_argument("--history", metavar="USER", help="List USER's saved analyses, newest first")
    ap.add_argument("--history-file", metavar="PATH", help="History file (default: $CODEINSIGHTS_HISTORY)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s: %(message)s")

    if args.history:
        try:
            records = HistoryStore(args.history_file).for_user(args.history)
        except HistoryError as e:
            print(f"Error: {e}")
            return 1
        for rec in records:
            first = rec.source_code.strip().splitlines()[0] if rec.source_code.strip() else ""
            print(f"{rec.timestamp}\t{rec.language}\t{first}")
        return 0

    if args.sample:
        language = args.language or "c"
        result = Analyzer(language).analyze_code(SAMPLE_CODE[language])
    elif args.source == "-":
        result = Analyzer(args.language or "c").analyze_code(sys.stdin.read())
    elif args.source:
        language = args.language or language_for_path(args.source) or "c"
        analyzer = Analyzer(language)
        if args.language:
            # An explicit tag wins over the extension.
            try:
                with open(args.source, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                print(f"Error: Failed to read source file: {e}")
                return 1
            result = analyzer.analyze_code(text)
        else:
            result = analyzer.analyze_file(args.source)
    else:
        print("Error: a source file, '-' or --sample is required")
        return 1

    if not result.success:
        for e in result.errors:
            print("Error:", e)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif args.explain_prompt:
        sys.stdout.write(build_prompt(ExplanationRequest.from_result(result)))
    else:
        sys.stdout.write(format_result(result, args.emit))

    if args.save:
        try:
            HistoryStore(args.history_file).append(args.save, result)
        except (HistoryError, OSError) as e:
            print(f"Error: cannot save history: {e}")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
