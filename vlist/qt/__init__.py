"""PyQt6 adapters for the virtual list core."""
