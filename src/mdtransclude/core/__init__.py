"""Core library: virtual file tree, options and transclusion."""
