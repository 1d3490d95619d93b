"""Long-running services around the game engine: the real-time runner and the API session store."""
