"""Pure placement domain: grid, ships, validation and scoring."""
