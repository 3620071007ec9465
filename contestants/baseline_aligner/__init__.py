"""
Baseline Aligner Agent Package

A simple heuristic agent that drops the box when it is lined up with
the box beneath it. Serves as a benchmark and example.
"""

from .agent import StackerAgent, create_agent

__all__ = ["StackerAgent", "create_agent"]
