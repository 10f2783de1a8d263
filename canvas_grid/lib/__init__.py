"""Briques de canvas-grid, des feuilles (s0) à l'orchestration (s4)."""
