from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path
from signal_core.config import load_config
from signal_core.descriptions import describe_signals
from signal_core.engine import analyze
from signal_core.insights import generate_work_style_summary


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Analyze a session's test results into behavioral signals.")
    ap.add_argument("input", help="JSON file with sessionId, testResults and optional context ('-' for stdin)")
    ap.add_argument("--purpose", help="override context.purpose (falls back to DEFAULT_PURPOSE)")
    ap.add_argument("--describe", action="store_true", help="attach Persian descriptions per category")
    ap.add_argument("--summary", action="store_true", help="attach the work-style summary")
    ap.add_argument("--verbose", "-v", action="store_true")
    return ap


def _read_payload(src: str):
    text = sys.stdin.read() if src == "-" else Path(src).read_text(encoding="utf-8")
    return json.loads(text)


def main(argv: list[str] | None = None) -> int:
    a = build_parser().parse_args(argv)
    cfg = load_config()
    level = "DEBUG" if a.verbose else str(cfg.get("LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")

    try:
        payload = _read_payload(a.input)
    except (OSError, ValueError) as exc:
        print(f"cannot read {a.input}: {exc}", file=sys.stderr)
        return 1

    if isinstance(payload, dict) and isinstance(payload.get("context") or {}, dict):
        ctx = dict(payload.get("context") or {})
        purpose = a.purpose or ctx.get("purpose") or cfg.get("DEFAULT_PURPOSE")
        if purpose: ctx["purpose"] = purpose
        if not ctx.get("locale") and cfg.get("DEFAULT_LOCALE"): ctx["locale"] = cfg["DEFAULT_LOCALE"]
        if ctx: payload = {**payload, "context": ctx}

    out = analyze(payload)
    doc = out.to_dict()
    if a.describe:
        doc["descriptions"] = {cat.value: [d.to_dict() for d in items] for cat, items in describe_signals(out.signals).items()}
    if a.summary:
        doc["summary"] = generate_work_style_summary(out.signals).to_dict()
    print(json.dumps(doc, ensure_ascii=False, indent=2))
    return 0 if out.status != "error" else 2


if __name__ == "__main__":
    raise SystemExit(main())
