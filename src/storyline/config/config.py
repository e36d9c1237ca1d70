"""
Configuration for the story classifier.

Every threshold the detectors use lives here as a dataclass field whose
default is the production value. A YAML file can override any of them:

    default:
      vendor_siphoning:
        min_entity_total: 50000
    environments:
      staging:
        cluster:
          high_money: 100000

Environment variables (``STORYLINE_ENV``, ``STORYLINE_CONFIG``,
``STORYLINE_LOG_LEVEL``) pick the environment, the file and the log level.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parents[3] / "config" / "classifier.yaml"

GENERIC_VENDOR_NAMES = frozenset({
    "AGENCY", "UNKNOWN", "N/A", "NONE", "UNKNOWN RECIPIENT", "MISC", "OTHER", "",
})

LDA_SOURCE_ALIASES = frozenset({"Senate LDA", "senate_lda", "LDA"})

SANCTIONS_MARKERS = ("SDN", "OFAC", "Sanctions")


@dataclass
class MoneyFormat:
    """How raw amounts are shortened into labels like $1.2M or $60k."""
    symbol: str = "$"
    million_threshold: float = 1_000_000
    thousand_threshold: float = 1_000
    million_suffix: str = "M"
    thousand_suffix: str = "k"
    million_decimals: int = 1


@dataclass
class VendorSiphoningConfig:
    """One vendor paid by many campaigns (fan-in)."""
    min_payers: int = 3
    min_entity_total: float = 50_000
    min_committee_total: float = 20_000
    critical_payers: int = 5
    high_total: float = 200_000
    min_vendor_length: int = 3
    narrated_payers: int = 5
    generic_vendor_names: FrozenSet[str] = GENERIC_VENDOR_NAMES

    def __post_init__(self):
        self.generic_vendor_names = frozenset(n.upper().strip() for n in self.generic_vendor_names)


@dataclass
class CrossCampaignConfig:
    signal_type: str = "CROSS_CAMPAIGN"
    min_entities: int = 2
    high_entities: int = 4


@dataclass
class RevolvingDoorConfig:
    source_aliases: FrozenSet[str] = LDA_SOURCE_ALIASES
    high_lobbyists: int = 3
    listed_lobbyists: int = 5
    narrated_lobbyists: int = 3

    def __post_init__(self):
        self.source_aliases = frozenset(self.source_aliases)


@dataclass
class FamilyPaymentConfig:
    signal_type: str = "FEC_SPOUSE_PAYMENT"
    high_total: float = 100_000


@dataclass
class SanctionsConfig:
    critical_markers: Tuple[str, ...] = SANCTIONS_MARKERS
    narrated_matches: int = 3

    def __post_init__(self):
        self.critical_markers = tuple(self.critical_markers)


@dataclass
class HighVolumeConfig:
    signal_type: str = "FEC_HIGH_VOLUME"
    min_total: float = 50_000
    high_total: float = 500_000
    listed_vendors: int = 5


@dataclass
class ClusterConfig:
    """Relationship-graph clusters."""
    min_relationships: int = 2
    min_cluster_size: int = 3
    high_cluster_size: int = 5
    high_money: float = 200_000


@dataclass
class InvestigationConfig:
    min_findings: int = 2
    medium_findings: int = 3
    high_findings: int = 6
    narrated_findings: int = 3


_SECTIONS = {
    "money": MoneyFormat,
    "vendor_siphoning": VendorSiphoningConfig,
    "cross_campaign": CrossCampaignConfig,
    "revolving_door": RevolvingDoorConfig,
    "family_payments": FamilyPaymentConfig,
    "sanctions": SanctionsConfig,
    "high_volume": HighVolumeConfig,
    "cluster": ClusterConfig,
    "investigation": InvestigationConfig,
}


@dataclass
class ClassifierConfig:
    """Top-level configuration for a classification run."""
    money: MoneyFormat = field(default_factory=MoneyFormat)
    vendor_siphoning: VendorSiphoningConfig = field(default_factory=VendorSiphoningConfig)
    cross_campaign: CrossCampaignConfig = field(default_factory=CrossCampaignConfig)
    revolving_door: RevolvingDoorConfig = field(default_factory=RevolvingDoorConfig)
    family_payments: FamilyPaymentConfig = field(default_factory=FamilyPaymentConfig)
    sanctions: SanctionsConfig = field(default_factory=SanctionsConfig)
    high_volume: HighVolumeConfig = field(default_factory=HighVolumeConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    investigation: InvestigationConfig = field(default_factory=InvestigationConfig)

    environment: str = "default"
    log_level: str = "INFO"

    def validate(self):
        money = self.money
        if money.thousand_threshold <= 0 or money.million_threshold <= money.thousand_threshold:
            raise ValueError(
                f"money thresholds must satisfy 0 < thousand < million, got "
                f"{money.thousand_threshold} / {money.million_threshold}"
            )
        if money.million_decimals < 0:
            raise ValueError(f"million_decimals must be >= 0, got {money.million_decimals}")

        vs = self.vendor_siphoning
        if vs.min_payers < 1:
            raise ValueError(f"vendor_siphoning.min_payers must be >= 1, got {vs.min_payers}")
        if vs.critical_payers < vs.min_payers:
            raise ValueError("vendor_siphoning.critical_payers must be >= min_payers")

        if self.cross_campaign.min_entities < 1:
            raise ValueError("cross_campaign.min_entities must be >= 1")

        cl = self.cluster
        if cl.min_cluster_size < 2:
            raise ValueError(f"cluster.min_cluster_size must be >= 2, got {cl.min_cluster_size}")
        if cl.high_cluster_size < cl.min_cluster_size:
            raise ValueError("cluster.high_cluster_size must be >= min_cluster_size")

        inv = self.investigation
        if not 1 <= inv.min_findings <= inv.medium_findings <= inv.high_findings:
            raise ValueError(
                "investigation thresholds must satisfy 1 <= min_findings <= "
                "medium_findings <= high_findings"
            )

        for name, value in (
            ("vendor_siphoning.min_entity_total", vs.min_entity_total),
            ("vendor_siphoning.min_committee_total", vs.min_committee_total),
            ("family_payments.high_total", self.family_payments.high_total),
            ("high_volume.min_total", self.high_volume.min_total),
            ("cluster.high_money", cl.high_money),
        ):
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassifierConfig":
        """Build a config from a (possibly partial) nested mapping."""
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            section = _SECTIONS.get(key)
            if section is not None:
                kwargs[key] = _build_section(section, key, value or {})
            elif key in ("environment", "log_level"):
                kwargs[key] = str(value)
            else:
                logger.warning(f"Ignoring unknown config section: {key}")
        return cls(**kwargs)


def _build_section(section: type, name: str, values: Dict[str, Any]):
    known = {f.name for f in fields(section)}
    unknown = set(values) - known
    if unknown:
        logger.warning(f"Ignoring unknown {name} setting(s): {', '.join(sorted(unknown))}")
    return section(**{k: v for k, v in values.items() if k in known})


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    environment: Optional[str] = None,
) -> ClassifierConfig:
    """
    Load classifier configuration.

    Args:
        config_path: YAML file. Defaults to $STORYLINE_CONFIG, then
            config/classifier.yaml at the project root.
        environment: Environment block to merge over ``default``.
            Defaults to $STORYLINE_ENV.

    Returns:
        Validated ClassifierConfig (built-in defaults if no file exists)
    """
    environment = environment or os.environ.get("STORYLINE_ENV") or "default"
    explicit = config_path is not None or bool(os.environ.get("STORYLINE_CONFIG"))
    path = Path(config_path or os.environ.get("STORYLINE_CONFIG") or DEFAULT_CONFIG_PATH)

    raw: Dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded classifier config from {path}")
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {path}")
    else:
        logger.debug("No classifier config file found, using built-in defaults")

    default_config = raw.get("default", {}) or {}
    env_config = (raw.get("environments", {}) or {}).get(environment, {}) or {}
    if environment != "default" and not env_config and raw:
        logger.warning(f"No '{environment}' block in {path}; using defaults only")

    merged = _deep_merge(default_config, env_config)
    merged["environment"] = environment
    if os.environ.get("STORYLINE_LOG_LEVEL"):
        merged["log_level"] = os.environ["STORYLINE_LOG_LEVEL"]

    config = ClassifierConfig.from_dict(merged)
    config.validate()
    return config
