"""Interchange activities.

Each activity performs a single unit of work on placemark data:
- parse_kml: Extract placemark records from KML documents
- validate_region: Geofence points against a region
- export: Encode records as CSV, XLSX, KML, or KMZ
"""
