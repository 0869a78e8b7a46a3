"""
jotr - note materialization from file-based templates
"""

__version__ = "0.4.0"
