"""Command parsing, binding, resolution and execution."""
