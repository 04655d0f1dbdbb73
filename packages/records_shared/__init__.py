"""Shared primitives for the records service: config, logging, errors, time."""
