"""Pure valence/arousal model shared by the affect runtime."""
