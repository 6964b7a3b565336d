"""Dual-backend data access for the labeling task backend."""
