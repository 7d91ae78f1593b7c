"""
Routing engine integration layer.

Responsibilities:
- Manage GraphHopper base URL and request defaults.
- Build the round-trip request body and the basic route query.
- Report transport, status and payload failures as ``GraphHopperError``.
"""
