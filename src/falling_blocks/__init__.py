"""Falling Blocks: a single-player falling-block puzzle with a pygame front end
and a gymnasium environment."""

__version__ = "0.1.0"
