"""
Schemas shared by the membership registry server and its clients.
"""

__version__ = "0.1.0"
