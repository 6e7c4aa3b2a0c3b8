"""Gymnasium environments for Polymacher."""

from __future__ import annotations

from gymnasium.envs.registration import register

# One level per episode; choose it with reset(options={"level": i})
register(
    id="Polymacher-v0",
    entry_point="polymacher.env.polymacher_env:PolymacherEnv",
)

__all__ = ["Polymacher-v0"]
