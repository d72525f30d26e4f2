"""Recipe import service.

Fetches recipe pages from third-party cooking websites and turns them into
normalized recipe records.
"""

__version__ = "0.1.0"
