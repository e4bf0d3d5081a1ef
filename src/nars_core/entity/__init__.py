"""Budgets, truth values, stamps, sentences, links and concepts."""
