# Jacob Mitchell, Kyle Axtell
# CS 456 - Data Compression
# experiments.py

"""
Huffman codec experiments: in-memory table vs self-describing container

Runs repeated experiments over synthetic datasets and records timing, size and correctness

Outputs (in --outdir):
  - metrics.csv     (raw row per run per pipeline)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 128 --exp2_max_kb 1024
  python experiments.py --outdir results --exp1_generators uniform256,zipf128,english_like

Notes:
  "huffman"   = padding header + packed codes, code table kept in memory
  "container" = frequency table header + the same payload, decodable on its own
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import matplotlib
matplotlib.use("Agg") # charts are only written to files
import matplotlib.pyplot as plt

import huffman as huff
from bitpack import pack_bits_from_codes, unpack_and_decode
from codec import decompress_container, serialize_frequencies

PIPELINES = ("huffman", "container")


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


# Synthetic dataset generators

def _sample_from_weights(rng: random.Random, weights: Sequence[float], size: int) -> List[int]:
    # inverse-CDF sampling with a binary search per draw
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    out = []
    for _ in range(size):
        r = rng.random()
        lo, hi = 0, len(cdf) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if r <= cdf[mid]:
                hi = mid
            else:
                lo = mid + 1
        out.append(lo)
    return out

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [i for i in range(256) if i != dominant]
    return bytes(dominant if rng.random() < dom_frac else rng.choice(others) for _ in range(size))

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    return bytes(_sample_from_weights(rng, weights, size))

ENGLISH_CHARS = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ\n"

def _english_weight(ch: str) -> float:
    if ch == ' ':
        return 13.0
    if ch == '\n':
        return 1.5
    if ch.lower() in "etaoinshrdlu":
        return 6.0
    if ch.lower() in "cmfwgypbvk":
        return 2.5
    return 1.2

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    weights = [_english_weight(ch) for ch in ENGLISH_CHARS]
    return bytes(ord(ENGLISH_CHARS[i]) for i in _sample_from_weights(rng, weights, size))

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> Tuple[str, bytes]:
    """
    Unknown generator names fall back to uniform256 (the name records the fallback)
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform256", gen_uniform(size_bytes, alphabet=256, seed=seed)
    return name, fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    pipeline: str  # "huffman" or "container"
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    compressed_bytes: int
    header_bytes: int  # padding header, plus the frequency table for "container"
    pad_bits: int
    compression_ratio: float
    correctness_ok: int  # 1 or 0


def run_one(data: bytes, pipeline: str) -> MetricRow:
    if pipeline not in PIPELINES:
        raise ValueError(f"pipeline must be one of {PIPELINES}")

    # build (frequency table -> tree -> codes)
    t0 = now_ns()
    ft = huff.freq_table(data)
    code_map, reverse_map = huff.build_code_tables(ft)
    t1 = now_ns()
    build_ms = ns_to_ms(t1 - t0)

    # encode
    t2 = now_ns()
    table_header = serialize_frequencies(ft) if pipeline == "container" else b""
    payload = pack_bits_from_codes(data, code_map) if data else b""
    packed = table_header + payload
    t3 = now_ns()
    encode_ms = ns_to_ms(t3 - t2)

    # decode
    t4 = now_ns()
    if pipeline == "container":
        decoded = decompress_container(packed)
    else:
        decoded = unpack_and_decode(packed, reverse_map) if packed else b""
    t5 = now_ns()
    decode_ms = ns_to_ms(t5 - t4)

    pad_bits = payload[0] if payload else 0 # first payload byte is the padding header
    header_bytes = len(table_header) + (1 if payload else 0)

    return MetricRow(
        exp_name="",
        dataset_name="",
        file_size_bytes=len(data),
        run_id=0,
        pipeline=pipeline,
        unique_symbols=len(ft),
        build_ms=build_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + decode_ms,
        compressed_bytes=len(packed),
        header_bytes=header_bytes,
        pad_bits=pad_bits,
        compression_ratio=len(packed) / max(1, len(data)),
        correctness_ok=1 if decoded == data else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


SUMMARY_METRICS = ("compression_ratio", "build_ms", "encode_ms", "decode_ms", "total_ms", "header_bytes")

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes, pipeline and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.file_size_bytes, r.pipeline)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "file_size_bytes", "pipeline", "n_runs"]
    for metric in SUMMARY_METRICS:
        summary_fields += [f"{metric}_mean", f"{metric}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size_b, pipeline = key
            row = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "pipeline": pipeline,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for metric in SUMMARY_METRICS:
                m, s = mean_stdev([getattr(x, metric) for x in items])
                row[f"{metric}_mean"] = m
                row[f"{metric}_stdev"] = s
            w.writerow(row)



# Plotting

def _mean_of(rows: List[MetricRow], field: str) -> float:
    vals = [getattr(r, field) for r in rows]
    return statistics.mean(vals) if vals else float("nan")

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    for field, ylabel, title, fname in (
        ("compression_ratio", "Compressed Bytes / Original Bytes", "Compression Ratio by Distribution", "exp1_compression_ratio.png"),
        ("encode_ms", "Encode Time (ms)", "Encode Time by Distribution", "exp1_encode_time.png"),
        ("decode_ms", "Decode Time (ms)", "Decode Time by Distribution", "exp1_decode_time.png"),
    ):
        plt.figure()
        for p in PIPELINES:
            y = [_mean_of([r for r in exp_rows if r.dataset_name == d and r.pipeline == p], field) for d in datasets]
            plt.plot(x, y, marker="o", label=p)
        plt.xticks(x, datasets, rotation=20, ha="right")
        plt.ylabel(ylabel)
        plt.title(f"Experiment 1: {title}")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / fname, dpi=200)
        plt.close()


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))

        def mean_size(size: int, pipeline: str, field: str) -> float:
            return _mean_of([r for r in dist_rows if r.file_size_bytes == size and r.pipeline == pipeline], field)

        plt.figure()
        for p in PIPELINES:
            y = [mean_size(s, p, "encode_ms") for s in sizes]
            plt.plot(sizes, y, marker="o", label=p)
        plt.xlabel("File Size (bytes)")
        plt.ylabel("Encode Time (ms)")
        plt.title(f"Experiment 2: Encode Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_encode_time_{dist}.png", dpi=200)
        plt.close()

        # share of the container output spent on the frequency table header
        plt.figure()
        y = [mean_size(s, "container", "header_bytes") / max(1.0, mean_size(s, "container", "compressed_bytes")) for s in sizes]
        plt.plot(sizes, y, marker="o")
        plt.xscale("log", base=2)
        plt.xlabel("File Size (bytes)")
        plt.ylabel("Header Bytes / Compressed Bytes")
        plt.title(f"Experiment 2: Container Header Overhead vs Size ({dist})")
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_header_overhead_{dist}.png", dpi=200)
        plt.close()



# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=256, help="Experiment 1 fixed file size in KB")
    ap.add_argument("--exp1_generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=1, help="Experiment 2 min size in KB (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=2048, help="Experiment 2 max size in KB (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform256,zipf128,repetitive90",
                    help="Comma-separated dataset generator names for experiment 2")

    args = ap.parse_args()

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                for pipeline in PIPELINES:
                    row = run_one(data, pipeline)
                    row.exp_name = "exp1_distribution"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)

    # Experiment 2: size scaling (powers of 2)
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.exp2_min_kb) * 1024
        while s <= max(1, args.exp2_max_kb) * 1024:
            sizes.append(s)
            s *= 2

        for gen_name in parse_csv_list(args.exp2_generators):
            for size_b in sizes:
                for run_id in range(1, args.runs + 1):
                    dataset_name, data = generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id)
                    for pipeline in PIPELINES:
                        row = run_one(data, pipeline)
                        row.exp_name = "exp2_size_scaling"
                        row.dataset_name = dataset_name
                        row.run_id = run_id
                        rows.append(row)

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    plot_experiment_1(rows, outdir)
    plot_experiment_2(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
