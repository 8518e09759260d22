"""Shortest-path engine: cost models, priority queue and search."""
