"""User-facing surfaces built on top of the font registration core."""
