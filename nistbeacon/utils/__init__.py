"""
nistbeacon.utils
----------------

Utility namespace for the beacon client: strict hex/byte helpers used when
rebuilding signed payloads, and epoch-seconds conversions shared by the
fetcher and the seeded generator.

This package file deliberately avoids eager imports.
"""

__all__: list[str] = []
