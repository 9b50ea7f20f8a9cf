"""
The VIEW layer converts model objects into PyVista datasets for an external
renderer. Nothing here opens a window.
"""
