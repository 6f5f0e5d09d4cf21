"""Building blocks shared by every Pulse context.

Holds bearer-token verification, the auth error taxonomy, identifier
generation and the observation context bound into probes. Nothing here
may import from ``iam``.
"""
