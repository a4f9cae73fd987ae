"""Shared utilities for mdtransclude."""
