"""Cross-cutting service primitives: errors and ports."""
