"""
py-stenaldern: historical landscape reconstruction for Scandinavian locations.
"""

__version__ = "0.1.0"
