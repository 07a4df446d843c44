"""
Pore Landscape Tools

A Python package for computing the interaction energy landscape of a probe
particle inside a periodic porous framework and deriving its adsorption
characteristic curve.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
