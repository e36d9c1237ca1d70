"""
Headline and narrative templates for classified stories.

Templates are plain ``str.format`` strings keyed by pattern. Detectors build
the field mapping (pre-formatted money labels, joined name lists) and call
``render_headline`` / ``render_narrative``.
"""

from typing import Any, Dict

from .models import StoryPattern


# =============================================================================
# HEADLINES
# =============================================================================

HEADLINES: Dict[str, str] = {
    "vendor_siphoning_entities": "{vendor} received campaign funds from {payer_count} different politicians",
    "vendor_siphoning_committees": "{vendor} received campaign funds from {payer_count} different committees",
    StoryPattern.CROSS_CAMPAIGN_NETWORK: (
        '{entity_count} campaigns share vendor "{vendor}": cross-campaign coordination detected'
    ),
    StoryPattern.REVOLVING_DOOR: "{lobbyist_count} former government officials now lobby for {name}",
    StoryPattern.FAMILY_PAYMENTS: "{name}'s campaign paid {total} to family-connected entities",
    StoryPattern.SANCTIONS_FLAG: "{name} flagged on {list_count} watchlist(s)",
    StoryPattern.HIGH_VOLUME_PASS_THROUGH: "{name} made {payment_count} high-volume payments totaling {total}",
    StoryPattern.DARK_MONEY_CLUSTER: "Network of {size} connected entities centered on {hub}",
    StoryPattern.INVESTIGATION_FINDINGS: "{name}: {finding_count} findings across {source_count} federal databases",
    StoryPattern.DATA_LOADED: "Data loaded; no patterns above threshold yet",
}


# =============================================================================
# NARRATIVES
# =============================================================================

NARRATIVES: Dict[str, str] = {
    "vendor_siphoning_entities": (
        'The vendor "{vendor}" collected {total} in campaign disbursements from '
        "{payer_count} separate political campaigns. The largest payers include "
        "{top_payers}. When a single vendor is paid by this many campaigns, it can "
        "indicate a coordinated network funneling money to a common recipient."
    ),
    "vendor_siphoning_committees": (
        'The vendor "{vendor}" collected {total} in campaign disbursements from '
        "{payer_count} separate committees. Top payers: {top_payers}. When a single "
        "vendor is paid by this many committees, it can indicate a coordinated "
        "network funneling money to a common recipient."
    ),
    StoryPattern.CROSS_CAMPAIGN_NETWORK: (
        'Automated analysis found that {entity_names} all made payments to the same '
        'vendor "{vendor}". Cross-campaign vendor sharing can be innocent (common '
        "consultants) but at this scale ({total}) warrants scrutiny for coordinated "
        "spending or bundled payments circumventing contribution limits."
    ),
    StoryPattern.REVOLVING_DOOR: (
        "Senate lobbying disclosures reveal that {lobbyist_count} lobbyist(s) registered "
        "to {name} previously held government positions. {former_positions}. The "
        "revolving door between government service and lobbying raises questions "
        "about regulatory capture and undue influence."
    ),
    StoryPattern.FAMILY_PAYMENTS: (
        "FEC records show {payment_count} payment(s) from {name}'s campaign committee "
        "to spouse or family-connected recipients: {recipients}. Total: {total}. Using "
        "campaign funds to pay family members is legal if for legitimate services, but "
        "can constitute self-dealing when payments are disproportionate to services "
        "rendered."
    ),
    StoryPattern.SANCTIONS_FLAG: (
        'Screening of "{name}" returned {match_count} match(es) across watchlists: '
        "{lists}. Matches include: {matches}. Sanctions and PEP list matches require "
        "verification but indicate potential regulatory risk or connection to "
        "sanctioned parties."
    ),
    StoryPattern.HIGH_VOLUME_PASS_THROUGH: (
        "{name} was flagged for unusually high-volume disbursement patterns. "
        "{payment_count} payments totaling {total} went to vendors including: "
        "{vendors}. High-volume pass-through patterns can indicate bulk payments to "
        "intermediaries who then redistribute funds, a common layering technique."
    ),
    StoryPattern.DARK_MONEY_CLUSTER: (
        "Graph analysis identified a cluster of {size} interconnected entities linked "
        "by {relationship_count} relationships ({relationship_types}). The hub entity "
        '"{hub}" has a bridge score of {bridge_score:.2f}, indicating it connects '
        "otherwise separate parts of the network. Combined campaign spending across "
        "this cluster totals {total}. Connected entities: {members}."
    ),
    StoryPattern.INVESTIGATION_FINDINGS: (
        "The automated investigation of {name} queried {sources_queried} federal "
        "databases and returned {finding_count} notable findings from {source_labels}. "
        "{thesis}Key findings: {key_findings}."
    ),
    StoryPattern.DATA_LOADED: (
        "Loaded {entity_count} entities, {disbursement_count} disbursements ({total}), "
        "and {signal_count} signals. No high-confidence patterns matched yet. Link more "
        "entities to committees or add signals to surface vendor siphoning and "
        "cross-campaign networks."
    ),
}


def _template_key(key: Any) -> Any:
    # Enum members and their string values both address the same template
    if isinstance(key, str) and not isinstance(key, StoryPattern):
        try:
            return StoryPattern(key)
        except ValueError:
            return key
    return key


def render_headline(key: Any, **fields: Any) -> str:
    """Render the headline template for a pattern (or sub-pattern key)."""
    return HEADLINES[_template_key(key)].format(**fields)


def render_narrative(key: Any, **fields: Any) -> str:
    """Render the narrative template for a pattern (or sub-pattern key)."""
    return NARRATIVES[_template_key(key)].format(**fields)
