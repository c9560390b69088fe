"""
Membership Registry

Single source of truth mapping identities to roles and managing the members
and managers of Organizations.
"""

__version__ = "0.1.0"
