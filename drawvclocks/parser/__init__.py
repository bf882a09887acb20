"""
Vector clock line parser for drawvclocks.

Provides lexical analysis and parsing of input lines of the form
``(optional label) n1, n2, ...``.
"""
