"""Personal task planner service."""
