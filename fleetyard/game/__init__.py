"""Placement game domain."""
