"""Charts of benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for WFC benchmark results.

    Compares configurations by solve time, backtracks per difficulty and the
    distribution of collapses per solve.
    """

    # Color palette for solver configurations
    COLORS = {
        "WFC": "#0083b0",        # Blue
        "WFC-plain": "#518471",  # Green
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Args:
            results: Benchmark results to chart.
            output_dir: Directory to save generated charts.
        """
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        self.frame = pd.DataFrame([r.to_dict() for r in results])
        self.configs = sorted(self.frame["config"].unique()) if not self.frame.empty else []
        self.palette = {c: self.COLORS.get(c, "#95a5a6") for c in self.configs}

        sns.set_theme(style="whitegrid")

    def _save(self, fig, name: str) -> str:
        fig.tight_layout()
        path = os.path.join(self.output_dir, name)
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_backtracks_by_difficulty(),
            self.plot_collapse_distribution(),
        ]

    def plot_time_comparison(self) -> str:
        """Bar chart of mean solve time per configuration."""
        fig, ax = plt.subplots(figsize=(10, 6))

        mean_times = self.frame.groupby("config")["time_seconds"].mean().reindex(self.configs)
        bars = ax.bar(self.configs, mean_times.values,
                      color=[self.palette[c] for c in self.configs],
                      edgecolor='black', linewidth=0.5)
        ax.bar_label(bars, labels=[f"{t:.4f}s" for t in mean_times.values], padding=3)

        ax.set_xlabel('Configuration', fontsize=12)
        ax.set_ylabel('Mean Time (seconds)', fontsize=12)
        ax.set_title('Mean Solve Time by Configuration', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save(fig, "time_comparison.png")

    def plot_backtracks_by_difficulty(self) -> str:
        """Box plot of backtracks per difficulty and configuration."""
        fig, ax = plt.subplots(figsize=(12, 6))

        sns.boxplot(data=self.frame, x="difficulty", y="backtracks", hue="config",
                    palette=self.palette, ax=ax)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Backtracks', fontsize=12)
        ax.set_title('Backtracks by Difficulty and Configuration', fontsize=14, fontweight='bold')
        ax.legend(title='Configuration')

        return self._save(fig, "backtracks_by_difficulty.png")

    def plot_collapse_distribution(self) -> str:
        """Histogram of collapses per solve."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sns.histplot(data=self.frame, x="collapses", hue="config",
                     palette=self.palette, element="step", ax=ax)

        ax.set_xlabel('Collapses per Solve', fontsize=12)
        ax.set_ylabel('Solves', fontsize=12)
        ax.set_title('Distribution of Collapses', fontsize=14, fontweight='bold')

        return self._save(fig, "collapse_distribution.png")

    def generate_summary_table(self) -> str:
        """Write a markdown table of per-configuration means."""
        grouped = self.frame.groupby("config").agg(
            runs=("solved", "size"),
            solved=("solved", "sum"),
            mean_time=("time_seconds", "mean"),
            mean_collapses=("collapses", "mean"),
            mean_backtracks=("backtracks", "mean"),
        )

        lines = [
            "| Configuration | Runs | Solved | Mean Time (s) | Mean Collapses | Mean Backtracks |",
            "|---|---|---|---|---|---|",
        ]
        for config, row in grouped.iterrows():
            lines.append(
                f"| {config} | {int(row['runs'])} | {int(row['solved'])} | "
                f"{row['mean_time']:.4f} | {row['mean_collapses']:.1f} | {row['mean_backtracks']:.1f} |"
            )

        path = os.path.join(self.output_dir, "summary_table.md")
        with open(path, "w") as f:
            f.write("\n".join(lines) + "\n")
        return path
