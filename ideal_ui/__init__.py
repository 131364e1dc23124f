"""Qt-facing state for the diagram viewer."""
