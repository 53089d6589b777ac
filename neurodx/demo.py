"""
Demo runner for the differential engine.

Computes one session (a preset or a JSON snapshot file) and prints the
ranked differential and urgency banner, or the full result as JSON.

Run:
    python -m neurodx --preset horner
    python -m neurodx --session snapshot.json --json
    python -m neurodx --list
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from neurodx import config
from neurodx.core.clinical import DifferentialEngine, EngineResult
from neurodx.core.clinical.presets import get_preset, preset_names
from neurodx.utils import NeuroDxError, SessionLoadError, get_logger, setup_logging

logger = get_logger(__name__)


def load_session(path: str) -> Dict[str, Any]:
    """Read a session snapshot (the store's JSON) from disk."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise SessionLoadError(f"Cannot read session file: {exc}", path=str(p)) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SessionLoadError(
            "Session file is not valid JSON", path=str(p),
            details={"line": exc.lineno, "column": exc.colno},
        ) from exc
    if not isinstance(data, dict):
        raise SessionLoadError("Session file must contain a JSON object", path=str(p))
    return data


def _fmt_mm(x: Optional[float]) -> str:
    return "—" if x is None else f"{x:.1f} mm"


def render_text(result: EngineResult) -> str:
    f = result.features
    lines = [
        f"Anisocoria  light: {_fmt_mm(f.anis_light)}   dark: {_fmt_mm(f.anis_dark)}",
        f"Pattern     {f.dominance.value if f.dominance else 'not called'} "
        f"(threshold {config.ANISO_THRESHOLD_MM} mm)",
        f"Urgency     [{result.urgency.level.value}] {result.urgency.text}",
        "",
    ]
    if not result.differential:
        lines.append("No scored differentials yet.")
    for idx, d in enumerate(result.differential, start=1):
        lines.append(f"{idx}. {d.name}  (score {d.score})")
        lines.extend(f"     - {why}" for why in d.why)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neurodx",
        description="Compute a neuro-ophthalmic differential for one session snapshot.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--preset", help="name of a built-in example session")
    source.add_argument("--session", help="path to a session snapshot JSON file")
    source.add_argument("--list", action="store_true", help="list preset names and exit")
    parser.add_argument("--json", action="store_true", help="print the full result as JSON")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="logging level (default from .env)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, config.LOG_FILE or None)

    if args.list:
        print("\n".join(preset_names()))
        return 0

    try:
        session = get_preset(args.preset) if args.preset else load_session(args.session)
    except NeuroDxError as exc:
        logger.error(f"{exc.code}: {exc.message}")
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return 2

    result = DifferentialEngine().compute(session)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_text(result))
    return 0
