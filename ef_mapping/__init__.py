"""
ef_mapping package marker.
"""

__version__ = "1.0.0"
