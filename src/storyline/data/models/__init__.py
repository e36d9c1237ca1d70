"""
Snapshot record models.

This package contains pydantic models only. Loading logic is in the
'loaders' package; classification logic is in 'storyline.classifier'.
"""

from .entity import Entity, Relationship, GraphNode
from .signal import (
    Signal, SignalDetail, CrossCampaignDetail, SpousePaymentDetail,
    HighVolumeDetail, UnrecognizedDetail, parse_signal_detail,
    CROSS_CAMPAIGN, FEC_SPOUSE_PAYMENT, FEC_HIGH_VOLUME,
)
from .disbursement import Disbursement
from .investigation import Investigation, Finding, Lobbyist, RevolvingDoorDetail
from .screening import Screening
from .snapshot import InputSnapshot

__all__ = [
    # Entities and graph
    "Entity",
    "Relationship",
    "GraphNode",
    # Signals
    "Signal",
    "SignalDetail",
    "CrossCampaignDetail",
    "SpousePaymentDetail",
    "HighVolumeDetail",
    "UnrecognizedDetail",
    "parse_signal_detail",
    "CROSS_CAMPAIGN",
    "FEC_SPOUSE_PAYMENT",
    "FEC_HIGH_VOLUME",
    # Money
    "Disbursement",
    # Investigations
    "Investigation",
    "Finding",
    "Lobbyist",
    "RevolvingDoorDetail",
    # Watchlists
    "Screening",
    # Snapshot
    "InputSnapshot",
]
