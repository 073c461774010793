"""
Enrichment modules for TraceVis
"""

from .ip_classifier import IPClassifier, IPType, is_local
from .geo_lookup import GeoResolver

__all__ = ['IPClassifier', 'IPType', 'is_local', 'GeoResolver']
