"""Tiberium Alliances Lineup Optimizer - attack lineup and wave plan recommendations."""
