"""Leaf helpers shared by the engine."""
