import argparse
import sys
from pathlib import Path

from .diagnostics import latex_stats, validate_latex
from .pipeline import repair


def _report(label: str, text: str) -> bool:
    v = validate_latex(text)
    st = latex_stats(text)
    print(
        f"[latex_fix] {label}: inline={st.inline_math_count} display={st.display_math_count} "
        f"commands={st.command_count} valid={v.is_valid}",
        file=sys.stderr,
        flush=True,
    )
    for msg in v.errors + v.warnings:
        print(f"[latex_fix]   - {msg}", file=sys.stderr, flush=True)
    return v.is_valid


def main(argv=None):
    parser = argparse.ArgumentParser(description="Wrap bare LaTeX in $...$ / $$...$$ delimiters")

    parser.add_argument("input", nargs="?", help="Text/Markdown file to repair (default: stdin)")
    parser.add_argument("--output", "-o", help="Write the repaired text here (default: stdout)")
    parser.add_argument("--check", action="store_true", help="Only report validation/stats before and after")

    args = parser.parse_args(argv)

    try:
        if args.input:
            src = Path(args.input).read_text(encoding="utf-8")
        else:
            src = sys.stdin.read()
        fixed = repair(src)

        if args.check:
            _report("input", src)
            ok = _report("output", fixed)
            sys.exit(0 if ok else 1)

        if args.output:
            Path(args.output).write_text(fixed, encoding="utf-8")
            print(f"Saved to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(fixed)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
