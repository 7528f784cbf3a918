"""
Uptime dashboard sync engine.

Keeps a local view of the remote collection of monitored services
consistent under polling refresh, single-record mutation, selection and
bulk mutation.
"""

__version__ = "0.1.0"
