"""Diagnostics helpers shared by engine logging and exports."""
