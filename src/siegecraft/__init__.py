"""Siegecraft - Procedural siege engine shapes from ASCII templates.

Siegecraft reads a compact ASCII template of a siege engine structure
(walls, towers, ramps, bridges), resizes it to any feasible size while
keeping its corners, wall connectivity and ground posts intact, and emits
vector outlines for a rendering backend.

Example:
    $ siegecraft resize tower.txt -w 20 -H 12

Template alphabet: ``+`` corner, ``-`` horizontal wall, ``|`` vertical
wall, ``.`` floor, ``o`` ground anchor, space for empty.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
