"""
drawvclocks: draw the happens-before order of vector clocks.

Builds the Hasse diagram (transitive reduction) of a set of vector clocks
and writes it in DOT format for Graphviz.
"""

__version__ = "0.1.0"
