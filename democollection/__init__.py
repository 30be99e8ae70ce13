"""Vector math, a camera with orbit control, simple images, procedural meshes and PMX model loading."""

__version__ = "0.1.0"

__all__ = [
    "camera",
    "common",
    "image",
    "linalg",
    "modelloader",
    "modeltypes",
    "orbitcontroller",
    "pmxloader",
    "position",
]