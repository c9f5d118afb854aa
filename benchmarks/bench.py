#!/usr/bin/env python3
"""Benchmark harness for the preprocessing pipeline on synthetic games.

Outputs JSONL rows capturing timings and output hashes; does not gate CI.
"""

from __future__ import annotations

import argparse
import json
import logging
import platform
import sys
import time
from datetime import datetime
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wgsl_game.directives import scan_directives  # noqa: E402
from wgsl_game.host_layout import HostLayout  # noqa: E402
from wgsl_game.imports import resolve_imports  # noqa: E402
from wgsl_game.preprocessor import PreprocessorState, preprocess  # noqa: E402
from wgsl_game.rewriter import rewrite  # noqa: E402
from wgsl_game.scanner import scan_metadata  # noqa: E402
from wgsl_game.testing.memory_source import MemorySource  # noqa: E402

SUITES = ("scan", "rewrite", "imports", "preprocess", "pack")

# One line per directive kind, cycled to reach the requested size.
_LINE_TEMPLATES = (
    'let t{i} = textureSample(@texture("tex{r}.png"), @engine.sampler, uv);',
    'if (@engine.buttons[BTN_A] == 1) {{ @sound("snd{r}.wav").play(); }}',
    'let o{i} = @osc("param{p}");',
    'let v{i} = @video("clip{r}.mp4");',
    "let c{i} = @camera({r});",
    'let p{i} = @model("mesh{r}.obj").positions[0];',
    'let s{i} = @str("line {i}");',
    "let k{i} = @engine.keys[KEY_SPACE] + u32(@engine.time);",
)


def _now_ms() -> float:
    return time.perf_counter_ns() / 1e6


def _hash_text(text: str) -> str:
    data = np.frombuffer(text.encode("utf-8"), dtype=np.uint8)
    weights = np.arange(1, data.size + 1, dtype=np.int64) % 8191
    return str(int(np.sum(data.astype(np.int64) * weights)) % (10**12))


def make_game(lines: int, resources: int, seed: int) -> str:
    rng = np.random.default_rng(seed)
    body = ['@set_title("bench")', "@set_size(640, 480)", "struct GameState { pos: vec3f, score: u32, t: f32 }"]
    for i in range(lines):
        template = _LINE_TEMPLATES[i % len(_LINE_TEMPLATES)]
        body.append(template.format(i=i, r=int(rng.integers(resources)), p=int(rng.integers(32))))
    return "\n".join(body) + "\n"


def make_import_chain(depth: int, lines: int, seed: int) -> MemorySource:
    files = {}
    for level in range(depth):
        nxt = f'@import("mod{level + 1}.wgsl")\n' if level + 1 < depth else ""
        # every module also imports the root once, exercising the duplicate path
        files[f"mod{level}.wgsl"] = nxt + '@import("mod0.wgsl")\n' + make_game(lines, 4, seed + level)
    files["main.wgsl"] = '@import("mod0.wgsl")\nfn main() {}\n'
    return MemorySource(files)


@dataclass
class BenchResult:
    suite: str
    lines: int
    depth: Optional[int]
    run: int
    t_ms: float
    directives: int
    out_bytes: int
    hash_out: str
    hash_ref: str
    match: bool
    meta: dict

    def to_json(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)


def _timed(fn: Callable[[], str]):
    start = _now_ms()
    out = fn()
    return out, _now_ms() - start


def _suite_fn(suite: str, lines: int, depth: int, seed: int) -> Callable[[], str]:
    source = make_game(lines, 8, seed)
    if suite == "scan":
        return lambda: repr(scan_metadata(source).to_dict())
    if suite == "rewrite":
        directives = scan_directives(source)
        metadata = scan_metadata(source, directives=directives)
        return lambda: rewrite(source, metadata, directives=directives)
    if suite == "imports":
        store = make_import_chain(depth, lines, seed)
        return lambda: resolve_imports(store.read_text("main.wgsl"), store, {"main.wgsl"}, lambda text: text)
    if suite == "preprocess":
        store = make_import_chain(depth, lines, seed)
        return lambda: preprocess(store).code
    if suite == "pack":
        result = PreprocessorState(MemorySource()).preprocess_shader(source)
        layout = HostLayout.for_metadata(result.metadata, result.config)
        values = layout.new_input(640, 480)
        values.keys[:] = 1
        return lambda: layout.pack(values).hex()
    raise ValueError(f"Unknown suite: {suite}")


def run_suite(suite: str, sizes: Sequence[int], depth: int, repeats: int, seed: int, out: Path) -> None:
    results: List[str] = []
    meta: Dict[str, str] = {"python": platform.python_version(), "machine": platform.machine()}
    for lines in sizes:
        fn = _suite_fn(suite, lines, depth, seed)
        ref = fn()
        ref_hash = _hash_text(ref)
        count = len(scan_directives(make_game(lines, 8, seed)))
        for run in range(repeats):
            code, elapsed = _timed(fn)
            out_hash = _hash_text(code)
            res = BenchResult(
                suite=suite,
                lines=lines,
                depth=depth if suite in ("imports", "preprocess") else None,
                run=run,
                t_ms=elapsed,
                directives=count,
                out_bytes=len(code),
                hash_out=out_hash,
                hash_ref=ref_hash,
                match=bool(out_hash == ref_hash),
                meta=meta,
            )
            results.append(res.to_json())
    _emit(out, results)


def _emit(out: Path, rows: Iterable[str]) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("a", encoding="utf-8") as fh:
        for line in rows:
            fh.write(line + "\n")


def _timestamped_path(path: Optional[Path], suite: str) -> Path:
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    if path is None:
        return Path("benchmarks/results") / f"{suite}-{ts}.jsonl"
    if path.suffix:
        return path.with_name(f"{path.stem}-{suite}-{ts}{path.suffix}")
    return path / f"{suite}-{ts}.jsonl"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="wgsl_game preprocessing benchmark runner.")
    p.add_argument("--suite", choices=SUITES, required=True)
    p.add_argument("--sizes", type=int, nargs="+", default=[100, 1000, 10000], help="Directive lines per file.")
    p.add_argument("--depth", type=int, default=4, help="Import chain depth for imports/preprocess.")
    p.add_argument("--repeats", type=int, default=3)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--out", type=Path, default=None)
    p.add_argument("-v", "--verbose", action="store_true", help="Show wgsl_game debug logging.")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    out = _timestamped_path(args.out, args.suite)
    run_suite(args.suite, args.sizes, args.depth, args.repeats, args.seed, out)


if __name__ == "__main__":
    main()
