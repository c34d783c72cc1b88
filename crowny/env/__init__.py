"""Gymnasium bindings for Crowny."""

from .gym_env import CrownyEnv

__all__ = ["CrownyEnv"]
