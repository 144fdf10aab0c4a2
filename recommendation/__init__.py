"""PathFinder specialization recommendation service."""
