"""Front ends that render store state and invoke operations."""
