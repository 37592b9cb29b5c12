"""Infrastructure KML interchange.

Geospatial data interchange for a telecom-infrastructure mapping
dashboard: parses KML into POP / Sub-POP placemark records, validates
coordinates against a geographic region, and exports collections as
CSV, XLSX, KML, or KMZ byte buffers.
"""

__version__ = "0.1.0"
