"""Application state, ports and the command set the UI talks to."""
