"""
Geometry kernel for visualising tetrahedral micromagnetic meshes and the
sample planes placed around them.
"""
__version__ = "0.1.0"
