"""
Geomarker CLI - Command-line interface for the marker pipeline.

Usage:
    geomarker-cli cluster data/items.yaml --lat 37.785 --lon -122.425 \\
        --lat-delta 0.05 --lon-delta 0.05
    geomarker-cli --config config/service.yaml publish data/items.yaml ...
"""

__version__ = "1.0.0"
