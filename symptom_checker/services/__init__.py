"""Session registry and workflow."""
