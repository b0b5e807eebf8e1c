"""
CAN script engine (canscript) - Executes user-defined statement functions.

This package stores programmatically assembled functions as linear
statement lists, runs them against a global/local variable store and
encodes hardware instructions into fixed-size CAN frames.
"""

__version__ = "0.1.0"
__author__ = "canscript Project"
