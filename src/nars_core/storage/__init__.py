"""Bags, the per-tick context and memory."""
