"""Entry point for dkeys.

Usage:
    dkeys suggest "I want to wri"          # ranked completions for the last word
    dkeys check "I has a apple"            # list grammar corrections
    dkeys check "I has a apple" --apply    # apply them all and print the result
"""
import sys
import logging
import argparse


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def run_suggest(config, text: str) -> int:
    from dkeys.oracle import SpellCheckOracle
    from dkeys.suggestions import SuggestionRanker

    ranker = SuggestionRanker(SpellCheckOracle(), locale=config.locale,
                              limit=config.max_suggestions)
    for suggestion in ranker.rank(text):
        print(suggestion)
    return 0


def run_check(config, text: str, cursor=None, apply=False, url=None) -> int:
    from dkeys.api_client import GrammarClient
    from dkeys.buffer import TextBuffer
    from dkeys.session import KeyboardSession

    logger = logging.getLogger(__name__)

    if cursor is None:
        cursor = len(text)
    cursor = max(0, min(cursor, len(text)))
    buffer = TextBuffer(text[:cursor], text[cursor:])

    client = GrammarClient(url=url or config.grammar_url,
                           timeout_ms=config.grammar_timeout_ms)
    # Suggestions are not used here; a no-op oracle avoids loading dictionaries.
    session = KeyboardSession(config, proxy=buffer, oracle=_NoSuggestions(),
                              grammar_client=client)
    if session.check_grammar() is None:
        logger.info("Nothing to check")
        return 0
    session.wait_for_grammar_check()

    pending = session.pending_corrections()
    if not pending:
        print("No grammar issues found.")
        return 0

    for c in pending:
        print(f"{c.start}-{c.end}: {c.old_text!r} -> {c.new_text!r}  {c.explanation}")

    if not apply:
        return 0

    failures = 0
    # Apply last-positioned first so offsets of the rest stay put.
    for c in sorted(pending, key=lambda c: c.start, reverse=True):
        result = session.apply_correction(c.id)
        if not result.applied:
            failures += 1
    print(buffer.text)
    return 1 if failures else 0


class _NoSuggestions:
    def completions(self, partial_word, locale):
        return []

    def corrections(self, partial_word, locale):
        return []


def main(argv=None):
    from dkeys.config import Config

    parser = argparse.ArgumentParser(description="dkeys")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--config", help="Path to config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    p_suggest = sub.add_parser("suggest", help="Rank completions for the last word of TEXT")
    p_suggest.add_argument("text")

    p_check = sub.add_parser("check", help="Run the grammar service on TEXT")
    p_check.add_argument("text")
    p_check.add_argument("--cursor", type=int, default=None,
                         help="Cursor offset into TEXT (default: end)")
    p_check.add_argument("--url", help="Override grammar_url from config")
    p_check.add_argument("--apply", action="store_true",
                         help="Apply every correction and print the result")

    args = parser.parse_args(argv)

    config = Config(args.config)
    setup_logging(args.debug or config.debug_logging)

    if args.command == "suggest":
        return run_suggest(config, args.text)

    return run_check(config, args.text, cursor=args.cursor, apply=args.apply,
                     url=args.url)


if __name__ == "__main__":
    sys.exit(main())
