"""Standalone sweeps built on the benchmark runner."""
