"""Configuration package for bundleminifier."""
