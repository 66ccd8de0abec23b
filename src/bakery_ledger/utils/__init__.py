"""Utility modules: configuration, constants, validators and sample data."""
