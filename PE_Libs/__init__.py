"""
PE_Libs - Pixel Edit Library Modules

This package contains the core functionality for Pixel Edit,
organized into specialized sub-packages:

- ImageEditingLib: Raster buffers, pixel filters, histograms and image file I/O
- SessionLib: Bounded undo/redo history, edit sessions and background execution
"""

__version__ = "0.1.0"
