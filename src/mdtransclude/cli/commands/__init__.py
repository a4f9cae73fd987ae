"""Top-level mdtransclude commands."""
