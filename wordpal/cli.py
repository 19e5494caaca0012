"""
Word drill CLI.

Usage:
    python -m wordpal.cli --db words.txt review
    python -m wordpal.cli --db words.txt due
    python -m wordpal.cli --db words.txt stats
    python -m wordpal.cli --db words.txt serve --port 8000
    python -m wordpal.cli --db words.txt --seed 0x2a --delays 0,1,3,7 review
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from wordpal.messages import FAILED_DB_INIT_MESSAGE
from wordpal.rng import DEFAULT_SEED, XorShiftRng
from wordpal.scheduler import DelaySchedule
from wordpal.session import ReviewSession, run_review_session


def _seed(text: str) -> int:
    seed = int(text, 0)
    if seed == 0:
        raise argparse.ArgumentTypeError("seed must be non-zero")
    return seed


def _open_session(args) -> ReviewSession:
    try:
        return ReviewSession.open_database(
            args.db,
            schedule=args.delays,
            rng=XorShiftRng(args.seed),
        )
    except OSError as e:
        print(f"{FAILED_DB_INIT_MESSAGE}\n\n({e})")
        sys.exit(1)


def cmd_review(args):
    """Run interactive review session."""
    session = _open_session(args)
    try:
        run_review_session(session)
    finally:
        session.close()


def cmd_due(args):
    """Show words that can be reviewed now."""
    session = _open_session(args)
    try:
        available = session.store.available
        if not available:
            print("No words available right now.")
            return
        print(f"\n{len(available)} word(s) available for review:\n")
        for i, entry in enumerate(available, 1):
            print(f"  {i}. {entry.word} -- {entry.translation}  "
                  f"(iteration={entry.iteration})")
    finally:
        session.close()


def cmd_stats(args):
    """Show database statistics."""
    session = _open_session(args)
    try:
        stats = session.stats()
    finally:
        session.close()

    print(f"\nDatabase: {args.db}")
    print(f"  Total words:   {stats['total']}")
    print(f"  Available:     {stats['available']}")
    print(f"  Pending:       {stats['pending']}")
    if stats['skipped_lines']:
        print(f"  Skipped lines: {stats['skipped_lines']}")
    if stats['by_iteration']:
        print("  By iteration:")
        for it, count in sorted(stats['by_iteration'].items(), key=lambda kv: int(kv[0])):
            print(f"    {it}: {count}")


def cmd_serve(args):
    """Serve the review loop over local HTTP."""
    import uvicorn

    os.environ["WORDPAL_DB_PATH"] = str(Path(args.db).resolve())
    os.environ["WORDPAL_RNG_SEED"] = str(args.seed)
    if args.delays is not None:
        os.environ["WORDPAL_DELAYS"] = ",".join(str(d) for d in args.delays.delays)
    uvicorn.run("server.app:app", host=args.host, port=args.port)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Wordpal -- spaced repetition vocabulary drill",
        prog="python -m wordpal.cli",
    )
    parser.add_argument(
        '--db', default='words.txt',
        help="Path to the word database file (default: words.txt)",
    )
    parser.add_argument(
        '--seed', type=_seed, default=DEFAULT_SEED,
        help="RNG seed, decimal or 0x-prefixed hex (default: fixed)",
    )
    parser.add_argument(
        '--delays', type=DelaySchedule.parse, default=None,
        help="Comma-separated delay table in days (default: 0,1,7,14,30)",
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.add_parser('review', help='Run interactive review session')
    subparsers.add_parser('due', help='List words available for review')
    subparsers.add_parser('stats', help='Show database statistics')
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', default='127.0.0.1',
                              help='Bind address (default: 127.0.0.1)')
    serve_parser.add_argument('--port', type=int, default=8000,
                              help='Port (default: 8000)')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == 'review':
        cmd_review(args)
    elif args.command == 'due':
        cmd_due(args)
    elif args.command == 'stats':
        cmd_stats(args)
    elif args.command == 'serve':
        cmd_serve(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
