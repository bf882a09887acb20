"""
Core partial order algorithms for drawvclocks.

Contains the vector clock value type, clock partitioning and antichain
reduction, the Hasse diagram builder, and the graph store it produces.
"""
