"""Community Pulse hazard aggregation engine."""
