"""
The MODEL layer contains pure data structures and numerics.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with vectors, matrices, meshes and sample-plane geometry.
"""
