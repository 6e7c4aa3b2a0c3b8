from __future__ import annotations

import argparse
import random

import gymnasium as gym
import numpy as np

import polymacher.env  # noqa: F401


def run_random(level: int = 0, episodes: int = 5, seed: int | None = None) -> int:
    """Play masked random moves on one level; returns how many episodes solved it."""
    rng = random.Random(seed)
    env = gym.make("Polymacher-v0", level=level)
    solved = 0
    total_reward = 0.0
    for episode in range(episodes):
        obs, info = env.reset(seed=seed)
        done = False
        while not done:
            valid = np.flatnonzero(info["action_mask"]).tolist()
            action = rng.choice(valid) if valid else env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated
        if terminated:
            solved += 1
        print(f"episode {episode}: {'solved' if terminated else 'gave up'} after {info['steps']} steps")
    env.close()
    print(f"Random agent solved {solved}/{episodes}, total reward: {total_reward:.2f}")
    return solved


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--level", type=int, default=0)
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(args.level, args.episodes, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
