"""GUI utilities (paths, logging)."""
