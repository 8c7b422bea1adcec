"""LLM Compass: model recommendations for free-text use cases."""
