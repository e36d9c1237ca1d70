"""
Pure formatting helpers for story text: money labels and source labels.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..config.config import MoneyFormat


DEFAULT_MONEY_FORMAT = MoneyFormat()

SOURCE_LABELS = {
    "fec": "FEC Campaign Finance",
    "courtlistener": "Court Records",
    "usaspending": "Federal Contracts",
    "usaspending_grants": "Federal Grants",
    "propublica_990": "Nonprofit Tax Returns",
    "sec_edgar": "SEC Filings",
    "opencorporates": "Corporate Registry",
    "sam_gov": "SAM.gov",
    "house_disclosures": "Financial Disclosures",
    "irs_exempt_orgs": "IRS Exempt Orgs",
    "wikidata_family": "Family Connections",
    "Senate LDA": "Senate Lobbying",
    "senate_lda": "Senate Lobbying",
    "LDA": "Senate Lobbying",
    "OFAC SDN": "OFAC Sanctions",
    "opensanctions": "Sanctions Screening",
    "Federal Register": "Federal Register",
    "federal_register": "Federal Register",
}


def format_money(amount: float, fmt: Optional[MoneyFormat] = None) -> str:
    """
    Shorten an amount into a human label.

    >>> format_money(1_250_000)
    '$1.3M'
    >>> format_money(60_000)
    '$60k'
    >>> format_money(950)
    '$950'
    """
    fmt = fmt or DEFAULT_MONEY_FORMAT
    amount = float(amount or 0)

    if amount >= fmt.million_threshold:
        # Half-up here too: 1,250,000 reads $1.3M
        millions = Decimal(amount / fmt.million_threshold).quantize(
            Decimal(1).scaleb(-fmt.million_decimals), rounding=ROUND_HALF_UP
        )
        return f"{fmt.symbol}{millions:f}{fmt.million_suffix}"
    if amount >= fmt.thousand_threshold:
        # Half-up rounding so 2,500 reads $3k rather than banker's $2k
        return f"{fmt.symbol}{int(amount / fmt.thousand_threshold + 0.5)}{fmt.thousand_suffix}"
    if amount == int(amount):
        return f"{fmt.symbol}{int(amount):,}"
    return f"{fmt.symbol}{amount:,.2f}"


def humanize_label(tag: str) -> str:
    """snake_case tag -> words (``family_member`` -> ``family member``)."""
    return (tag or "").replace("_", " ")


def format_source_label(source: str) -> str:
    """Human label for a finding source tag."""
    return SOURCE_LABELS.get(source) or humanize_label(source)
