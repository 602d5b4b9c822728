"""Response mapping helpers."""
