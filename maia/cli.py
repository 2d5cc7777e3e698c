"""
maia - Work through learn lines from the command line.

Usage:
  maia lines
  maia start learnline:alg:ekv-losning-ensteg-addsub
  maia advance learnline:alg:ekv-losning-ensteg-addsub
  maia complete learnline:alg:ekv-losning-ensteg-addsub
  maia recommend --limit 2
  maia progress
  maia language sv
  maia reset
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from maia.classroom import (
    FocusedContent,
    LearnLineCatalog,
    LineAvailability,
    Navigator,
    ProgressTracker,
)
from maia.config import DEFAULT_RECOMMENDATION_LIMIT, DEFAULT_STATE_DIR, LOG_LEVEL
from maia.content_loader import load_learn_lines
from maia.i18n import Translator
from maia.schemas import MathProblemContent, TextContent, VisualizationContent
from maia.storage import FileKeyValueStore, ProfileStore

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    LineAvailability.COMPLETED: "✓",
    LineAvailability.IN_PROGRESS: "→",
    LineAvailability.AVAILABLE: "○",
    LineAvailability.LOCKED: "◌",
}


class Session:
    """Everything one command needs, wired against the local state dir."""

    def __init__(self, state_dir: Path, content_dir: Optional[Path] = None):
        lines = load_learn_lines(content_dir)
        logger.debug(f"Loaded {len(lines)} learn lines")
        self.store = FileKeyValueStore(state_dir)
        self.catalog = LearnLineCatalog(lines)
        self.focus = FocusedContent()
        self.tracker = ProgressTracker.load(self.catalog, ProfileStore(self.store), focus=self.focus)
        self.navigator = Navigator(self.catalog, self.tracker)
        self.translator = Translator(store=self.store)
        self.translator.initialize()
        self.translator.register_learn_lines(lines)

    def title(self, line_id: str) -> str:
        key = f"learn_lines.{line_id}.title"
        title = self.translator.t(key)
        if title == key:
            line = self.catalog.get(line_id)
            return line.title if line else line_id
        return title


def describe_item(item) -> str:
    if isinstance(item, TextContent):
        return item.text
    if isinstance(item, MathProblemContent):
        return f"Problem: {item.problem}"
    if isinstance(item, VisualizationContent):
        return f"[{item.config.left_side or ''} = {item.config.right_side or ''}]"
    return f"[{item.content_type}: {item.id}]"


def _unknown(session: Session, line_id: str) -> bool:
    if line_id in session.catalog.graph:
        return False
    print(f"Unknown learn line: {line_id}", file=sys.stderr)
    return True


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_lines(session: Session, args) -> int:
    t = session.translator.t
    print(t("lgm.title"))
    entries = session.navigator.get_map()
    if not entries:
        print(t("lgm.no_items"))
        return 0
    for entry in entries:
        mark = STATUS_MARKS[entry.availability]
        label = t(f"lgm.status.{entry.availability.value}")
        print(f"{mark} {session.title(entry.line.id)} ({entry.line.id}) - {label}")
        if entry.missing_prerequisites:
            missing = ", ".join(entry.missing_prerequisites)
            print(f"    {t('lgm.prereq')} {missing}")
    return 0


def cmd_start(session: Session, args) -> int:
    if _unknown(session, args.line_id):
        return 1
    if not session.navigator.start_line(args.line_id):
        print(session.translator.t("learn_lines.locked"))
        return 1
    item = session.tracker.current_content(args.line_id)
    if item is not None:
        print(describe_item(item))
    return 0


def cmd_advance(session: Session, args) -> int:
    if _unknown(session, args.line_id):
        return 1
    if not session.navigator.is_line_available(args.line_id):
        print(session.translator.t("learn_lines.locked"))
        return 1
    status = session.tracker.advance(args.line_id)
    print(f"Step {status.current_step_index + 1}, item {status.current_content_index + 1}")
    item = session.tracker.current_content(args.line_id)
    if item is not None:
        print(describe_item(item))
    focus = session.focus.snapshot()
    if focus.active:
        print(f"Focus: {focus.left_side} = {focus.right_side}")
    return 0


def cmd_complete(session: Session, args) -> int:
    if _unknown(session, args.line_id):
        return 1
    next_id = session.navigator.complete_line(args.line_id)
    print(session.translator.t("learn_lines.completed"))
    if next_id:
        print(f"{session.translator.t('progress.recommended')} {session.title(next_id)}")
    return 0


def cmd_recommend(session: Session, args) -> int:
    recommended = session.navigator.recommended_lines(limit=args.limit)
    if not recommended:
        print(session.translator.t("learn_lines.start_prompt"))
        return 0
    print(session.translator.t("progress.recommended"))
    for line_id in recommended:
        print(f"  {session.title(line_id)} ({line_id})")
    return 0


def cmd_progress(session: Session, args) -> int:
    summary = session.navigator.get_progress_summary()
    print(session.translator.t("progress.overall", percent=summary["completion_percent"]))
    print(
        f"  completed {summary['completed']}, in progress {summary['in_progress']}, "
        f"available {summary['available']}, locked {summary['locked']}"
    )
    return 0


def cmd_language(session: Session, args) -> int:
    try:
        session.translator.set_language(args.language)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    session.tracker.update_preferences(language=args.language)
    print(session.translator.t("app.title"))
    return 0


def cmd_reset(session: Session, args) -> int:
    session.tracker.reset()
    print(session.translator.t("progress.reset"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maia",
        description="Work through learn lines and track progress",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--state-dir",
        type=Path,
        default=DEFAULT_STATE_DIR,
        help="Directory for the local profile (default: $MAIA_HOME or ~/.maia)"
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=None,
        help="Directory of learn line YAML files (default: bundled content)"
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: $MAIA_LOG_LEVEL or INFO)"
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("lines", help="Show the learn graph map").set_defaults(func=cmd_lines)

    for name, func, help_text in (
        ("start", cmd_start, "Start or resume a learn line"),
        ("advance", cmd_advance, "Move to the next content item"),
        ("complete", cmd_complete, "Mark a learn line as mastered"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("line_id")
        p.set_defaults(func=func)

    p = sub.add_parser("recommend", help="Recommend learn lines to work on next")
    p.add_argument("--limit", type=int, default=DEFAULT_RECOMMENDATION_LIMIT)
    p.set_defaults(func=cmd_recommend)

    sub.add_parser("progress", help="Show overall progress").set_defaults(func=cmd_progress)

    p = sub.add_parser("language", help="Switch UI language")
    p.add_argument("language")
    p.set_defaults(func=cmd_language)

    sub.add_parser("reset", help="Discard all progress").set_defaults(func=cmd_reset)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    session = Session(args.state_dir, args.content)
    return args.func(session, args)


if __name__ == "__main__":
    sys.exit(main())
