"""
linearctl - Command-line client for Linear with local folder sync.
"""

__version__ = "0.3.0"
