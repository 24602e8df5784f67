"""
Pith - builds a knowledge graph of files, exported functions and modules
from extracted source facts.
"""

__version__ = "0.1.0"
