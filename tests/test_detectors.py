"""
Tests for the per-pattern detectors.
"""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from storyline.classifier.detectors import (
    detect_cross_campaign_networks,
    detect_family_payments,
    detect_high_volume_pass_through,
    detect_investigation_findings,
    detect_revolving_door,
    detect_sanctions_flags,
    detect_vendor_siphoning,
)
from storyline.classifier.models import Severity, Story, StoryEntity, StoryPattern


def _payments(vendor, payers, amount, **extra):
    return [
        {"entity_id": f"e{i}", "committee_name": f"Committee {i}",
         "recipient_name": vendor, "amount": amount, **extra}
        for i in range(payers)
    ]


class TestVendorSiphoning:
    """Test fan-in vendor detection."""

    def test_acme_example(self, make_context, acme_rows):
        stories = detect_vendor_siphoning(make_context(**acme_rows))

        assert len(stories) == 1
        story = stories[0]
        assert story.pattern == StoryPattern.VENDOR_SIPHONING
        assert story.id == "siphon-ACME CONSULTING"
        assert story.network_size == 3
        assert story.total_money == 60000
        assert story.severity == Severity.MEDIUM
        assert story.date == "2024-03-02"
        assert "3 different politicians" in story.headline

    def test_acme_roles(self, make_context, acme_rows):
        story = detect_vendor_siphoning(make_context(**acme_rows))[0]
        roles = {e.name: e.role for e in story.entities}
        assert roles["Alice Adams"] == "Paid $20k via Adams for Senate"
        assert story.evidence[0].description == "3 payments totaling $60k"

    def test_unknown_vendor_stoplisted(self, make_context):
        ctx = make_context(disbursements=_payments("UNKNOWN", 10, 100_000))
        assert detect_vendor_siphoning(ctx) == []

    def test_short_vendor_skipped(self, make_context):
        ctx = make_context(disbursements=_payments("AB", 5, 50_000))
        assert detect_vendor_siphoning(ctx) == []

    def test_below_entity_threshold(self, make_context):
        ctx = make_context(disbursements=_payments("SMALL VENDOR", 2, 100_000))
        assert detect_vendor_siphoning(ctx) == []

    def test_committee_grouping(self, make_context):
        rows = [
            {"committee_id": f"C{i}", "committee_name": f"PAC {i}",
             "recipient_name": "Print Shop", "amount": 10_000}
            for i in range(3)
        ]
        stories = detect_vendor_siphoning(make_context(disbursements=rows))

        assert len(stories) == 1
        story = stories[0]
        assert story.network_size == 3
        assert "3 different committees" in story.headline
        assert [e.role for e in story.entities] == ["Paid $10k"] * 3
        assert [e.name for e in story.entities] == ["PAC 0", "PAC 1", "PAC 2"]

    def test_committee_grouping_when_entity_total_too_low(self, make_context):
        # 3 payers but only $30k: below the entity bar, above the committee bar
        stories = detect_vendor_siphoning(make_context(disbursements=_payments("Print Shop", 3, 10_000)))
        assert len(stories) == 1
        assert "committees" in stories[0].headline

    def test_critical_with_five_payers(self, make_context):
        stories = detect_vendor_siphoning(make_context(disbursements=_payments("Big Vendor", 5, 20_000)))
        assert stories[0].severity == Severity.CRITICAL

    def test_high_with_large_total(self, make_context):
        stories = detect_vendor_siphoning(make_context(disbursements=_payments("Big Vendor", 3, 100_000)))
        assert stories[0].severity == Severity.HIGH

    def test_payers_sorted_by_amount(self, make_context):
        rows = [
            {"entity_id": "e1", "committee_name": "A", "recipient_name": "Vendor X", "amount": 10_000},
            {"entity_id": "e2", "committee_name": "B", "recipient_name": "Vendor X", "amount": 30_000},
            {"entity_id": "e3", "committee_name": "C", "recipient_name": "Vendor X", "amount": 20_000},
        ]
        story = detect_vendor_siphoning(make_context(disbursements=rows))[0]
        assert story.entity_ids == ["e2", "e3", "e1"]

    def test_last_committee_label_wins(self, make_context):
        rows = _payments("Vendor X", 3, 20_000) + [
            {"entity_id": "e0", "committee_name": "Renamed Committee",
             "recipient_name": "Vendor X", "amount": 1_000},
            {"entity_id": "e0", "committee_name": "", "recipient_name": "Vendor X", "amount": 1_000},
        ]
        story = detect_vendor_siphoning(make_context(disbursements=rows))[0]
        e0 = next(e for e in story.entities if e.id == "e0")
        assert e0.role.endswith("via Renamed Committee")

    def test_payer_without_committee_label(self, make_context):
        rows = [{"entity_id": f"e{i}", "recipient_name": "Vendor X", "amount": 20_000} for i in range(3)]
        story = detect_vendor_siphoning(make_context(disbursements=rows))[0]
        assert [e.role for e in story.entities] == ["Paid $20k via unknown committee"] * 3
        assert "e0 ($20k via unknown committee)" in story.narrative

    def test_unattributable_rows_ignored(self, make_context):
        rows = [{"recipient_name": "Vendor X", "amount": 100_000} for _ in range(5)]
        assert detect_vendor_siphoning(make_context(disbursements=rows)) == []


class TestCrossCampaign:
    """Test shared-vendor signal grouping."""

    def _signal(self, entity_id, **details):
        return {"id": f"s-{entity_id}", "signal_type": "CROSS_CAMPAIGN", "entity_id": entity_id,
                "detected_at": "2024-05-01", "details": details}

    def test_two_entities_share_vendor(self, make_context):
        ctx = make_context(
            entities=[{"id": "e1", "canonical_name": "Alice"}, {"id": "e2", "canonical_name": "Bob"}],
            signals=[
                self._signal("e1", vendor="Shared LLC", total_amount=1000),
                self._signal("e2", vendor="Shared LLC", amount=500),
            ],
        )
        stories = detect_cross_campaign_networks(ctx)

        assert len(stories) == 1
        story = stories[0]
        assert story.id == "crosscampaign-Shared LLC"
        assert story.total_money == 1500
        assert story.network_size == 2
        assert story.severity == Severity.MEDIUM
        assert story.date == "2024-05-01"
        assert story.evidence[0].description == "Alice → Shared LLC"

    def test_single_entity_not_a_network(self, make_context):
        ctx = make_context(signals=[
            self._signal("e1", vendor="V"),
            self._signal("e1", vendor="V"),
        ])
        assert detect_cross_campaign_networks(ctx) == []

    def test_high_with_four_entities(self, make_context):
        ctx = make_context(signals=[self._signal(f"e{i}", recipient="V") for i in range(4)])
        stories = detect_cross_campaign_networks(ctx)
        assert stories[0].severity == Severity.HIGH
        assert stories[0].id == "crosscampaign-V"

    def test_missing_vendor_groups_as_unknown(self, make_context):
        ctx = make_context(signals=[self._signal("e1"), self._signal("e2")])
        assert detect_cross_campaign_networks(ctx)[0].id == "crosscampaign-unknown"


class TestRevolvingDoor:
    """Test lobbying-disclosure findings."""

    def _investigation(self, lobbyists, source="Senate LDA"):
        return {
            "id": "i1", "entity_id": "e1", "entity_name": "Acme Corp", "entered_at": "2024-06-01",
            "findings": [
                {"source": "fec", "summary": "Irrelevant"},
                {"source": source, "summary": "Filing for Acme Corp",
                 "detail": {"revolving_door_lobbyists": lobbyists}},
            ],
        }

    def test_story_from_filing(self, make_context):
        lobbyists = [
            {"name": "Jane Roe", "covered_position": "Chief of Staff"},
            {"name": "John Doe", "covered_position": "Counsel"},
        ]
        stories = detect_revolving_door(make_context(investigations=[self._investigation(lobbyists)]))

        assert len(stories) == 1
        story = stories[0]
        assert story.id == "revolving-e1-Jane Roe"
        assert story.severity == Severity.MEDIUM
        assert story.total_money == 0
        assert story.network_size == 3
        assert story.entities[0].role == "Lobbying registrant/client"
        assert story.entities[1].role == "Former: Chief of Staff"
        assert story.evidence[0].description == "Filing for Acme Corp"

    def test_high_with_many_lobbyists(self, make_context):
        lobbyists = [{"name": f"Lobbyist Number {i}", "covered_position": "Aide"} for i in range(7)]
        story = detect_revolving_door(make_context(investigations=[self._investigation(lobbyists)]))[0]
        assert story.severity == Severity.HIGH
        assert story.id == "revolving-e1-Lobbyist N"
        assert len(story.entities) == 6  # client + 5 lobbyists
        assert len(story.evidence) == 4  # filing + 3 lobbyists
        assert story.network_size == 8

    def test_other_sources_ignored(self, make_context):
        lobbyists = [{"name": "Jane Roe", "covered_position": "Aide"}]
        ctx = make_context(investigations=[self._investigation(lobbyists, source="fec")])
        assert detect_revolving_door(ctx) == []

    def test_empty_lobbyist_list(self, make_context):
        assert detect_revolving_door(make_context(investigations=[self._investigation([])])) == []

    def test_nameless_lobbyists_still_counted(self, make_context):
        lobbyists = [
            {"name": "Jane Roe", "covered_position": "Chief of Staff"},
            {"covered_position": "Counsel"},
            {"name": None, "covered_position": "Clerk"},
        ]
        story = detect_revolving_door(make_context(investigations=[self._investigation(lobbyists)]))[0]

        assert story.severity == Severity.HIGH
        assert story.network_size == 4
        assert story.id == "revolving-e1-Jane Roe"
        assert [e.role for e in story.entities[1:]] == [
            "Former: Chief of Staff", "Former: Counsel", "Former: Clerk",
        ]

    def test_nameless_first_lobbyist_id(self, make_context):
        lobbyists = [{"covered_position": "Aide"}]
        story = detect_revolving_door(make_context(investigations=[self._investigation(lobbyists)]))[0]
        assert story.id == "revolving-e1-"


class TestFamilyPayments:
    """Test spouse-payment signal grouping."""

    def test_grouped_by_entity(self, make_context):
        ctx = make_context(
            entities=[{"id": "e1", "canonical_name": "Sen. Smith"}],
            signals=[
                {"signal_type": "FEC_SPOUSE_PAYMENT", "entity_id": "e1",
                 "details": {"recipient": "Smith Strategies", "amount": 60_000}},
                {"signal_type": "FEC_SPOUSE_PAYMENT", "entity_id": "e1",
                 "details": {"recipient": "Smith Strategies", "amount": 50_000, "description": "Consulting"}},
            ],
        )
        stories = detect_family_payments(ctx)

        assert len(stories) == 1
        story = stories[0]
        assert story.id == "family-e1"
        assert story.total_money == 110_000
        assert story.severity == Severity.HIGH
        assert story.network_size == 2
        assert story.headline == "Sen. Smith's campaign paid $110k to family-connected entities"
        assert [e.description for e in story.evidence] == ["Payment to Smith Strategies", "Consulting"]

    def test_medium_below_threshold(self, make_context):
        ctx = make_context(signals=[
            {"signal_type": "FEC_SPOUSE_PAYMENT", "entity_id": "e1", "details": {"recipient": "R", "amount": 5_000}},
        ])
        assert detect_family_payments(ctx)[0].severity == Severity.MEDIUM

    def test_signal_without_entity_skipped(self, make_context):
        ctx = make_context(signals=[
            {"signal_type": "FEC_SPOUSE_PAYMENT", "details": {"recipient": "R", "amount": 500_000}},
        ])
        assert detect_family_payments(ctx) == []


class TestSanctions:
    """Test watchlist screening flags."""

    def test_ofac_is_critical(self, make_context):
        ctx = make_context(screenings=[
            {"entity_name": "Ivan Petrov", "screened_name": "PETROV, Ivan", "list_name": "OFAC SDN",
             "match_type": "fuzzy", "created_at": "2024-02-02"},
            {"entity_name": "Ivan Petrov", "screened_name": "Ivan Petrov", "source": "PEP List",
             "match_type": "exact"},
        ])
        stories = detect_sanctions_flags(ctx)

        assert len(stories) == 1
        story = stories[0]
        assert story.id == "sanctions-Ivan Petrov"
        assert story.severity == Severity.CRITICAL
        assert story.source_count == 2
        assert story.network_size == 1
        assert story.total_money == 0
        assert story.entities[0].id == ""
        assert [e.type for e in story.evidence] == ["OFAC SDN", "PEP List"]

    def test_pep_only_is_high(self, make_context):
        ctx = make_context(screenings=[{"entity_name": "Jane", "list_name": "PEP List"}])
        assert detect_sanctions_flags(ctx)[0].severity == Severity.HIGH

    def test_missing_name_groups_as_unknown(self, make_context):
        ctx = make_context(screenings=[{"list_name": "Sanctions EU"}])
        story = detect_sanctions_flags(ctx)[0]
        assert story.id == "sanctions-unknown"
        assert story.severity == Severity.CRITICAL


class TestHighVolume:
    """Test high-volume pass-through signals."""

    def _signal(self, entity_id, **details):
        return {"signal_type": "FEC_HIGH_VOLUME", "entity_id": entity_id, "details": details}

    def test_aggregated_per_entity(self, make_context):
        ctx = make_context(signals=[
            self._signal("e1", vendor="V1", total_amount=30_000, payment_count=10),
            self._signal("e1", recipient="V2", total_amount=30_000, payment_count=5),
            self._signal("e2", vendor="V3", total_amount=40_000, payment_count=50),
        ])
        stories = detect_high_volume_pass_through(ctx)

        assert len(stories) == 1
        story = stories[0]
        assert story.id == "highvol-e1"
        assert story.total_money == 60_000
        assert story.severity == Severity.MEDIUM
        assert story.network_size == 3
        assert "15 high-volume payments" in story.headline
        assert [e.name for e in story.entities[1:]] == ["V1", "V2"]

    def test_high_above_half_million(self, make_context):
        ctx = make_context(signals=[self._signal("e1", vendor="V", total_amount=600_000)])
        assert detect_high_volume_pass_through(ctx)[0].severity == Severity.HIGH

    def test_listed_vendors_capped(self, make_context):
        ctx = make_context(signals=[
            self._signal("e1", vendor=f"Vendor {i}", total_amount=10_000, payment_count=1)
            for i in range(7)
        ])
        story = detect_high_volume_pass_through(ctx)[0]

        assert len(story.entities) == 6  # disburser + 5 vendors
        assert [e.name for e in story.entities[1:]] == [f"Vendor {i}" for i in range(5)]
        assert story.network_size == 8
        assert "Vendor 5" not in story.narrative


class TestInvestigationFindings:
    """Test multi-finding investigations and suppression."""

    def _investigation(self, findings, entity_id="e1", status="active"):
        return {
            "id": "i1", "entity_id": entity_id, "entity_name": "Acme Corp", "status": status,
            "thesis": "Shell vendor", "sources_queried": ["fec", "courtlistener", "sec_edgar"],
            "findings": [{"source": src, "summary": f"Finding {i}"} for i, src in enumerate(findings)],
        }

    @pytest.mark.parametrize("count,severity", [
        (2, Severity.INFO),
        (3, Severity.MEDIUM),
        (6, Severity.HIGH),
    ])
    def test_severity_by_finding_count(self, make_context, count, severity):
        ctx = make_context(investigations=[self._investigation(["fec"] * count)])
        assert detect_investigation_findings(ctx)[0].severity == severity

    def test_single_finding_skipped(self, make_context):
        ctx = make_context(investigations=[self._investigation(["fec"])])
        assert detect_investigation_findings(ctx) == []

    def test_story_fields(self, make_context):
        ctx = make_context(
            investigations=[self._investigation(["fec", "courtlistener", "fec"])],
            disbursements=[{"entity_id": "e1", "amount": 1500}, {"entity_id": "e2", "amount": 99}],
        )
        story = detect_investigation_findings(ctx)[0]

        assert story.id == "inv-i1"
        assert story.total_money == 1500
        assert story.source_count == 2
        assert story.entities[0].role == "Under active investigation"
        assert [e.type for e in story.evidence] == [
            "FEC Campaign Finance", "Court Records", "FEC Campaign Finance",
        ]
        assert 'Investigation thesis: "Shell vendor".' in story.narrative
        assert "Finding 0. Finding 1. Finding 2" in story.narrative

    def test_suppressed_by_other_pattern(self, make_context):
        prior = Story(
            id="siphon-X", pattern=StoryPattern.VENDOR_SIPHONING, severity=Severity.MEDIUM,
            headline="h", narrative="n", entities=[StoryEntity(id="e1", name="Acme", role="r")],
        )
        ctx = make_context(prior=[prior], investigations=[self._investigation(["fec", "fec"])])
        assert detect_investigation_findings(ctx) == []

    def test_not_suppressed_by_same_pattern(self, make_context):
        prior = Story(
            id="inv-old", pattern=StoryPattern.INVESTIGATION_FINDINGS, severity=Severity.INFO,
            headline="h", narrative="n", entities=[StoryEntity(id="e1", name="Acme", role="r")],
        )
        ctx = make_context(prior=[prior], investigations=[self._investigation(["fec", "fec"])])
        assert len(detect_investigation_findings(ctx)) == 1

    def test_empty_entity_id_never_suppressed(self, make_context):
        prior = Story(
            id="sanctions-X", pattern=StoryPattern.SANCTIONS_FLAG, severity=Severity.HIGH,
            headline="h", narrative="n", entities=[StoryEntity(id="", name="X", role="r")],
        )
        ctx = make_context(prior=[prior], investigations=[self._investigation(["fec", "fec"], entity_id="")])
        assert len(detect_investigation_findings(ctx)) == 1

    def test_status_role(self, make_context):
        ctx = make_context(investigations=[self._investigation(["fec", "fec"], status="expired")])
        assert detect_investigation_findings(ctx)[0].entities[0].role == "expired"
