#!/usr/bin/env python3
"""Coverage guard for benchmarks.

Ensures public exports in wgsl_game are listed in benchmarks/coverage.yaml and that
referenced symbols actually exist.
"""

from __future__ import annotations

import sys
import yaml
from importlib import import_module
from pathlib import Path
from typing import Dict, List, Set, Tuple


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


def load_plan(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _public_exports() -> Set[str]:
    import wgsl_game

    return set(getattr(wgsl_game, "__all__", []))


def _missing_symbols(modules: Dict[str, Dict]) -> List[Tuple[str, str]]:
    missing = []
    for mod_name, entries in modules.items():
        mod = import_module(mod_name)
        for sym in entries or {}:
            # Class.method entries are checked down to the attribute
            target = mod
            for part in sym.split("."):
                target = getattr(target, part, None)
                if target is None:
                    missing.append((mod_name, sym))
                    break
    return missing


def main() -> int:
    plan_path = ROOT / "benchmarks" / "coverage.yaml"
    if not plan_path.exists():
        print("coverage.yaml missing", file=sys.stderr)
        return 1
    plan = load_plan(plan_path)
    exports = set(plan.get("exports", []))
    public = _public_exports()

    missing_from_plan = public - exports
    extra_in_plan = exports - public
    missing_symbols = _missing_symbols(plan.get("modules", {}))

    ok = True
    if missing_from_plan:
        ok = False
        print("ERROR: public exports missing from coverage.yaml:", ", ".join(sorted(missing_from_plan)))
    if extra_in_plan:
        ok = False
        print("ERROR: coverage.yaml lists exports not in wgsl_game.__all__:", ", ".join(sorted(extra_in_plan)))
    for mod, sym in missing_symbols:
        ok = False
        print(f"ERROR: coverage.yaml references missing symbol {mod}:{sym}")

    if ok:
        print("coverage check passed")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
