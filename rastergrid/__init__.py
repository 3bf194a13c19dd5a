"""Scalar grids, byte images, OBJ meshes, wireframe/thick-line geometry and sprite helpers."""

__version__ = "0.1.0"
__all__ = ["rand", "grid2d", "image", "objfile", "lines", "sprites"]