"""
Pattern detectors.

Each detector is a pure function of a DetectionContext returning zero or
more stories for one pattern type.
"""

from .base import DetectionContext, Detector
from .vendor_siphoning import detect_vendor_siphoning
from .cross_campaign import detect_cross_campaign_networks
from .revolving_door import detect_revolving_door
from .family_payments import detect_family_payments
from .sanctions import detect_sanctions_flags
from .high_volume import detect_high_volume_pass_through
from .dark_money import detect_dark_money_clusters
from .investigation_findings import detect_investigation_findings
from .fallback import build_data_loaded_story

__all__ = [
    "DetectionContext",
    "Detector",
    "detect_vendor_siphoning",
    "detect_cross_campaign_networks",
    "detect_revolving_door",
    "detect_family_payments",
    "detect_sanctions_flags",
    "detect_high_volume_pass_through",
    "detect_dark_money_clusters",
    "detect_investigation_findings",
    "build_data_loaded_story",
]
