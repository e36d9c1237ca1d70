"""Classifier configuration: thresholds, money formatting, YAML loading."""

from .config import (
    ClassifierConfig,
    MoneyFormat,
    VendorSiphoningConfig,
    CrossCampaignConfig,
    RevolvingDoorConfig,
    FamilyPaymentConfig,
    SanctionsConfig,
    HighVolumeConfig,
    ClusterConfig,
    InvestigationConfig,
    load_config,
)

__all__ = [
    "ClassifierConfig",
    "MoneyFormat",
    "VendorSiphoningConfig",
    "CrossCampaignConfig",
    "RevolvingDoorConfig",
    "FamilyPaymentConfig",
    "SanctionsConfig",
    "HighVolumeConfig",
    "ClusterConfig",
    "InvestigationConfig",
    "load_config",
]
