"""Projection engine: closed-form growth, withdrawal sizing, yearly simulation."""
