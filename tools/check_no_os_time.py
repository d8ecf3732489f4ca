from __future__ import annotations

"""Fail-fast grep to keep the host OS clock out of evaluation and capture logic.

Period windows take an explicit reference date and the match clock only
advances through MatchClock.tick, so nothing in the tree should read the
wall clock. The one allowed place to *mention* it is match_time.py.

Run:
  python -m tools.check_no_os_time [path ...]

Exit code:
  0 - clean
  1 - forbidden pattern found
"""

import os
import re
import sys
from pathlib import Path
from typing import Iterator, List, Tuple

FORBIDDEN_PATTERNS = [
    # datetime/date
    r"\bdate\.today\s*\(",
    r"\bdatetime\.now\s*\(",
    r"\bdatetime\.utcnow\s*\(",
    r"\b_dt\.datetime\.now\s*\(",
    # time / event loop clock
    r"\btime\.time\s*\(",
    r"\btime\.monotonic\s*\(",
    r"\btime\.perf_counter\s*\(",
    r"\bloop\.time\s*\(",
]

EXCLUDE_DIRS = {".git", "__pycache__", ".venv", "venv", "dist", "build", ".pytest_cache"}

EXCLUDE_FILES = {
    # Date helpers; documents the rule in its docstring.
    "match_time.py",
    # This checker itself.
    "check_no_os_time.py",
}

Hit = Tuple[Path, int, str, str]


def iter_py_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in EXCLUDE_DIRS]
        for fn in filenames:
            if fn.endswith(".py") and fn not in EXCLUDE_FILES:
                yield Path(dirpath) / fn


def scan(root: Path) -> List[Hit]:
    compiled = [re.compile(p) for p in FORBIDDEN_PATTERNS]
    hits: List[Hit] = []
    for fp in iter_py_files(root):
        text = fp.read_text(encoding="utf-8")
        for i, line in enumerate(text.splitlines(), start=1):
            for rx in compiled:
                if rx.search(line):
                    hits.append((fp.relative_to(root), i, line.strip(), rx.pattern))
    return hits


def main(argv: List[str]) -> int:
    repo = Path(__file__).resolve().parents[1]
    roots = [Path(a).resolve() for a in argv] or [repo]

    hits: List[Hit] = []
    for root in roots:
        hits.extend(scan(root))

    if not hits:
        print("[OK] No forbidden OS clock usage found.")
        return 0

    print("[FAIL] Forbidden OS clock usage found:\n")
    for rel, ln, line, pat in hits:
        print(f"- {rel}:{ln}: {line}")
        print(f"  matched: {pat}")
    print("\nFix: pass the reference date explicitly (match_time.require_date_iso) or tick MatchClock.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
