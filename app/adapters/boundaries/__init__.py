"""Region boundary providers."""

from app.adapters.boundaries.geojson import BoundaryRegistry, load_boundaries, parse_feature_collection

__all__ = ["BoundaryRegistry", "load_boundaries", "parse_feature_collection"]
