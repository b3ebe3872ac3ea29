"""Interactive grid pathfinding visualizer."""
