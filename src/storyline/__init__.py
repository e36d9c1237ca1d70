"""
Storyline - investigative story classification.

Synthesizes ranked narrative stories (vendor siphoning, cross-campaign
networks, revolving-door lobbying, family payments, sanctions hits,
high-volume pass-through, relationship clusters, investigation findings)
from a snapshot of campaign-finance and investigative records.
"""

__version__ = "0.1.0"
