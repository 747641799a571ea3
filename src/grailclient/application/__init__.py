"""Application layer: state services, detail views and presentation helpers."""
