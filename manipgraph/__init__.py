"""Constraint graphs and graph-aware path validation for manipulation planning."""
