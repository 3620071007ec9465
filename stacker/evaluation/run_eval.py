"""
Evaluation Harness
==================

Plays an agent through StackerEnv on every seed of the seed bank and
reports how well it stacks: score, how often landings are perfect, how much
width it loses, and how many ticks each stacked box costs.

Usage:
    python -m stacker.evaluation.run_eval --agent contestants/baseline_aligner
    python -m stacker.evaluation.run_eval --agent my_agent.py --seed 7 --seed 42
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import os
import sys
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from stacker.stack_core.env_gym import StackerEnv

AgentFn = Callable[[Dict[str, np.ndarray]], int]


@dataclass
class EpisodeStats:
    """What one game on one seed produced."""
    seed: int
    score: int
    ticks: int
    drops: int
    perfect_landings: int
    total_trimmed: int
    final_width: int               # Width of the top landed box
    termination_reason: str
    elapsed_time: float
    drop_ticks: Optional[List[int]] = None

    @property
    def perfect_rate(self) -> float:
        """Share of landings with no trim."""
        if self.score == 0:
            return 0.0
        return self.perfect_landings / self.score

    @property
    def ticks_per_box(self) -> Optional[float]:
        """Average ticks spent per stacked box, None if nothing was stacked."""
        if self.score == 0:
            return None
        return self.ticks / self.score


@dataclass
class EvalSummary:
    """Aggregate over all evaluated seeds."""
    episodes: List[EpisodeStats]
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    median_score: float
    mean_perfect_rate: float
    mean_trimmed: float
    median_ticks_per_box: Optional[float]
    terminations: Dict[str, int] = field(default_factory=dict)
    total_time: float = 0.0

    @classmethod
    def from_episodes(cls, episodes: List[EpisodeStats], total_time: float = 0.0) -> "EvalSummary":
        if not episodes:
            raise ValueError("Cannot summarize an empty evaluation")

        scores = np.array([e.score for e in episodes], dtype=np.int64)
        pace = [e.ticks_per_box for e in episodes if e.ticks_per_box is not None]

        return cls(
            episodes=episodes,
            mean_score=float(scores.mean()),
            std_score=float(scores.std()),
            min_score=int(scores.min()),
            max_score=int(scores.max()),
            median_score=float(np.median(scores)),
            mean_perfect_rate=float(np.mean([e.perfect_rate for e in episodes])),
            mean_trimmed=float(np.mean([e.total_trimmed for e in episodes])),
            median_ticks_per_box=float(np.median(pace)) if pace else None,
            terminations=dict(Counter(e.termination_reason for e in episodes)),
            total_time=total_time,
        )

    def format(self) -> str:
        pace = "n/a" if self.median_ticks_per_box is None else f"{self.median_ticks_per_box:.1f}"
        ends = ", ".join(f"{reason}={count}" for reason, count in sorted(self.terminations.items()))
        lines = [
            "=" * 50,
            "EVALUATION SUMMARY",
            "=" * 50,
            f"Seeds evaluated:   {len(self.episodes)}",
            f"Score:             {self.mean_score:.2f} +/- {self.std_score:.2f} "
            f"(min {self.min_score}, median {self.median_score:.1f}, max {self.max_score})",
            f"Perfect landings:  {self.mean_perfect_rate:.1%}",
            f"Width trimmed:     {self.mean_trimmed:.1f} per game",
            f"Ticks per box:     {pace}",
            f"Game endings:      {ends}",
            f"Total time:        {self.total_time:.2f}s",
            "=" * 50,
        ]
        return "\n".join(lines)


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """Read the seed list from seed_bank.json (the bundled one by default)."""
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")
    with open(path, "r") as f:
        return [int(seed) for seed in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> AgentFn:
    """
    Import an agent from a contestant directory or a single .py file.

    The module may expose a ``StackerAgent`` class, a ``create_agent``
    factory or a bare ``act`` function; the first one found is used.

    Returns:
        Callable mapping an observation to 0 (wait) or 1 (drop).
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_name = f"stacker_agent_{agent_file.parent.name}"
    module_spec = importlib.util.spec_from_file_location(module_name, agent_file)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")
    module = importlib.util.module_from_spec(module_spec)
    sys.modules[module_name] = module
    module_spec.loader.exec_module(module)

    if hasattr(module, "StackerAgent"):
        return module.StackerAgent().act
    if hasattr(module, "create_agent"):
        return module.create_agent().act
    if hasattr(module, "act"):
        return module.act
    raise AttributeError(
        f"{agent_file} defines no StackerAgent class, create_agent factory or act function"
    )


def play_episode(
    env: StackerEnv,
    agent_fn: AgentFn,
    seed: int,
    record_drops: bool = False
) -> EpisodeStats:
    """
    Play one game to termination or truncation.

    Args:
        env: Environment to play in; reset with ``seed``.
        agent_fn: Observation -> action.
        seed: Color seed for the game.
        record_drops: Keep the tick of every accepted drop, enough to
            re-simulate the game with ``replay_drops``.
    """
    obs, info = env.reset(seed=seed)
    drop_ticks: Optional[List[int]] = [] if record_drops else None
    start = time.time()

    terminated = truncated = False
    while not (terminated or truncated):
        obs, _, terminated, truncated, info = env.step(int(agent_fn(obs)))
        if drop_ticks is not None and info["dropped"]:
            drop_ticks.append(info["ticks"])

    return EpisodeStats(
        seed=seed,
        score=info["score"],
        ticks=info["ticks"],
        drops=info["drops"],
        perfect_landings=info["perfect_landings"],
        total_trimmed=info["total_trimmed"],
        final_width=env.game.previous_box.width,
        termination_reason=info["terminated_reason"],
        elapsed_time=time.time() - start,
        drop_ticks=drop_ticks,
    )


def evaluate_agent(
    agent_fn: AgentFn,
    seeds: Optional[List[int]] = None,
    config_path: Optional[str] = None,
    record_drops: bool = False,
    verbose: bool = True
) -> EvalSummary:
    """
    Play one game per seed in a single environment and summarize.

    Args:
        agent_fn: Observation -> action.
        seeds: Seeds to play. Uses the seed bank if None.
        config_path: Alternate game_config.yaml.
        record_drops: Keep drop ticks on every EpisodeStats.
        verbose: Print a line per seed and the summary.
    """
    if seeds is None:
        seeds = load_seed_bank()

    env = StackerEnv(config_path=config_path)
    episodes: List[EpisodeStats] = []
    start = time.time()
    try:
        for seed in seeds:
            stats = play_episode(env, agent_fn, seed, record_drops=record_drops)
            episodes.append(stats)
            if verbose:
                print(f"  seed {seed:>6}: score={stats.score:<4} "
                      f"perfect={stats.perfect_landings:<4} trimmed={stats.total_trimmed:<5} "
                      f"ticks={stats.ticks} ({stats.termination_reason})")
    finally:
        env.close()

    summary = EvalSummary.from_episodes(episodes, total_time=time.time() - start)
    if verbose:
        print()
        print(summary.format())
    return summary


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Write the summary and per-seed stats to JSON."""
    data = asdict(summary)
    data["agent"] = agent_name
    data["timestamp"] = time.strftime("%Y-%m-%d %H:%M:%S")
    for record, episode in zip(data["episodes"], summary.episodes):
        record["perfect_rate"] = episode.perfect_rate
        record["ticks_per_box"] = episode.ticks_per_box

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a box stacking agent")
    parser.add_argument("--agent", required=True, help="Agent directory or agent.py file")
    parser.add_argument("--seeds", default=None, help="Seed bank JSON (bundled bank if omitted)")
    parser.add_argument("--seed", type=int, action="append", default=None,
                        help="Play this seed; repeatable, overrides --seeds")
    parser.add_argument("--config", default=None, help="Alternate game_config.yaml")
    parser.add_argument("--output", default=None, help="Write results JSON here")
    parser.add_argument("--record-drops", action="store_true",
                        help="Store drop ticks per seed in the results")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    args = parser.parse_args()

    try:
        agent_fn = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error loading agent: {e}")
        return 1

    seeds = args.seed if args.seed else load_seed_bank(args.seeds)
    summary = evaluate_agent(
        agent_fn,
        seeds=seeds,
        config_path=args.config,
        record_drops=args.record_drops,
        verbose=not args.quiet
    )
    if args.quiet:
        print(summary.format())

    if args.output:
        save_results(summary, Path(args.agent).name, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
