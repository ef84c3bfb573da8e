"""
Valorant Abuse Detector Application Package.

This package contains the account lookup cache and the opponent interaction
analysis service built on the HenrikDev Valorant API.
"""

__version__ = "0.1.0"
