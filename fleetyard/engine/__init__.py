"""Engine runtime and API boundary modules."""
