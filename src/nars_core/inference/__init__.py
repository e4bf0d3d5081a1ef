"""Inference rules: truth and budget functions, rule tables and the default engine."""
