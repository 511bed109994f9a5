"""Agents that drive the gymnasium environment."""
