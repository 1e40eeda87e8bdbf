"""Domain layer: station model, errors and contracts."""
