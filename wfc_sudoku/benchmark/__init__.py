"""Benchmark module for the WFC solver."""

from .benchmark import Benchmark, BenchmarkResult, default_solvers

__all__ = ["Benchmark", "BenchmarkResult", "default_solvers"]
