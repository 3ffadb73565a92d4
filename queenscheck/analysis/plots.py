"""Visualization utilities for benchmark outputs.

Charts are written as PNG files into ``out_dir`` with a two-digit prefix for
stable ordering and the run suffix from ``settings.filename_suffix()``.

Chart map
---------
- 01_checker_time_vs_N.png: mean time per check vs N (log scale)
    - X: N (board size). Y: mean seconds for find_conflicts (pairwise),
      count_conflicts (line occupancy) and is_valid_solution.
- 02_check_time_distribution.png: per-run time distribution (boxplot)
    - X: N. Y: seconds (log scale), one box per checker.
- 03_pairwise_scaling_fit.png: log-log fit of pairwise time vs queens
    - What: the fitted slope estimates the growth exponent (about 2 for a
      pairwise scan, about 1 for line counting).
- 04_conflict_rate_vs_N.png: share of random boards with an attacking pair
"""
from __future__ import annotations

import os
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from . import settings
from .reporting import raw_runs_frame, summary_frame
from .stats import BenchmarkResults

CHECKER_LABELS = {
    "pairwise_time": "find_conflicts (pairwise)",
    "linecount_time": "count_conflicts (line count)",
    "validity_time": "is_valid_solution",
}


def _save(out_dir: str, name: str) -> str:
    fname = os.path.join(out_dir, f"{name}{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    return fname


def plot_checker_time_vs_n(summary: pd.DataFrame, out_dir: str) -> str:
    n_values = summary["n"].tolist()
    plt.figure(figsize=(12, 8))
    for metric, marker in (("pairwise_time", "o"), ("linecount_time", "s"), ("validity_time", "^")):
        means = [max(float(v or 0.0), 1e-9) for v in summary[f"{metric}_mean"]]
        plt.semilogy(n_values, means, marker=marker, linewidth=2, markersize=8, label=CHECKER_LABELS[metric])
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Mean time per check [s] (log scale)", fontsize=12)
    plt.title("Checker Time vs Board Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(n_values)
    fname = _save(out_dir, "01_checker_time_vs_N")
    print(f"Saved checker-time chart: {fname}")
    return fname


def plot_time_distribution(raw: pd.DataFrame, out_dir: str) -> str:
    long = raw.melt(
        id_vars=["n", "run"],
        value_vars=list(CHECKER_LABELS),
        var_name="checker",
        value_name="seconds",
    )
    long["checker"] = long["checker"].map(CHECKER_LABELS)
    long["seconds"] = long["seconds"].clip(lower=1e-9)

    plt.figure(figsize=(12, 8))
    ax = sns.boxplot(data=long, x="n", y="seconds", hue="checker")
    ax.set_yscale("log")
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Time per check [s] (log scale)", fontsize=12)
    ax.set_title("Distribution of Check Times per Board Size", fontsize=14)
    fname = _save(out_dir, "02_check_time_distribution")
    print(f"Saved time-distribution chart: {fname}")
    return fname


def plot_pairwise_scaling_fit(raw: pd.DataFrame, out_dir: str) -> str:
    grouped = raw.groupby("queens")[["pairwise_time", "linecount_time"]].mean().reset_index()
    grouped = grouped[grouped["queens"] > 1]
    queens = grouped["queens"].to_numpy(dtype=float)

    plt.figure(figsize=(12, 8))
    for metric, marker in (("pairwise_time", "o"), ("linecount_time", "s")):
        times = np.clip(grouped[metric].to_numpy(dtype=float), 1e-9, None)
        plt.loglog(queens, times, marker=marker, linestyle="none", markersize=8, label=CHECKER_LABELS[metric])
        if len(queens) >= 2:
            slope, intercept = np.polyfit(np.log(queens), np.log(times), 1)
            x_trend = np.linspace(queens.min(), queens.max(), 100)
            plt.loglog(
                x_trend,
                np.exp(intercept) * x_trend ** slope,
                linestyle="--",
                alpha=0.8,
                label=f"fit: time ~ k^{slope:.2f}",
            )
    plt.xlabel("Queens on board (k)", fontsize=12)
    plt.ylabel("Mean time per check [s]", fontsize=12)
    plt.title("Checker Scaling with Queen Count\n(log-log fit)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, which="both", alpha=0.5)
    fname = _save(out_dir, "03_pairwise_scaling_fit")
    print(f"Saved scaling-fit chart: {fname}")
    return fname


def plot_conflict_rate(summary: pd.DataFrame, out_dir: str) -> str:
    n_values = summary["n"].tolist()
    plt.figure(figsize=(12, 8))
    plt.plot(n_values, summary["conflict_rate"], marker="o", linewidth=2, markersize=8, label="Boards with conflicts")
    plt.plot(n_values, summary["solved_rate"], marker="^", linewidth=2, markersize=8, label="Boards already solved")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Share of random boards", fontsize=12)
    plt.title("Random Boards: Conflict and Solve Rates", fontsize=14)
    plt.ylim(-0.05, 1.05)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(n_values)
    fname = _save(out_dir, "04_conflict_rate_vs_N")
    print(f"Saved conflict-rate chart: {fname}")
    return fname


def plot_and_save(results: BenchmarkResults, out_dir: str) -> List[str]:
    """Generate every chart for ``results``; returns the written paths."""
    if not results:
        print("No benchmark results to plot.")
        return []
    os.makedirs(out_dir, exist_ok=True)
    sns.set_theme(style="whitegrid")

    summary = summary_frame(results)
    raw = raw_runs_frame(results)
    written = [plot_checker_time_vs_n(summary, out_dir)]
    if not raw.empty:
        written.append(plot_time_distribution(raw, out_dir))
        written.append(plot_pairwise_scaling_fit(raw, out_dir))
    written.append(plot_conflict_rate(summary, out_dir))
    return written
