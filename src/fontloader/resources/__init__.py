"""Fonts distributed with the package, searched after explicit bundles.

Drop ``.ttf``/``.otf`` files in the ``fonts`` directory next to this module to
ship them with the wheel.
"""
