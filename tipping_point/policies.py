"""
Policy and Model Input Definitions

Describes one hypothetical New York tax change and the full set of inputs for
a model run, plus conversion to and from plain dictionaries so the same
configuration can come from the UI, an assumptions JSON file, or code.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Literal

from .behavior import DEFAULT_BEHAVIORAL_PARAMS, BehavioralModelType, BehavioralParams
from .data.cohorts import DEFAULT_DATA_YEAR

TimeHorizon = Literal[1, 3, 5]
TIME_HORIZONS = (1, 3, 5)


@dataclass(frozen=True)
class PolicyChange:
    """
    A proposed change to NYS (and optionally NYC) personal income tax.

    Attributes:
        surcharge_rate: NYS surcharge on income above surcharge_threshold
        surcharge_threshold: Income above which the NYS surcharge applies
        flat_rate_change: Rate change applied to full income (e.g., 0.005 = +0.5pp)
        include_nyc: Whether NYC changes are modeled
        nyc_surcharge_rate: NYC surcharge on resident income above its threshold
        nyc_surcharge_threshold: Income above which the NYC surcharge applies
    """
    surcharge_rate: float = 0.02
    surcharge_threshold: float = 1_000_000
    flat_rate_change: float = 0.0
    include_nyc: bool = True
    nyc_surcharge_rate: float = 0.0
    nyc_surcharge_threshold: float = 1_000_000

    @property
    def is_noop(self) -> bool:
        """True when the policy changes no one's tax."""
        state_active = self.surcharge_rate != 0 and self.surcharge_threshold > 0
        nyc_active = self.include_nyc and self.nyc_surcharge_rate != 0 and self.nyc_surcharge_threshold > 0
        return not state_active and self.flat_rate_change == 0 and not nyc_active


@dataclass(frozen=True)
class ModelInput:
    """
    Full configuration of a model run.

    Attributes:
        policy: Tax change being evaluated
        behavioral: Migration response parameters
        time_horizon: Projection horizon in years (1, 3 or 5)
        middle_income_min: Lower bound of the band that absorbs any shortfall
        middle_income_max: Upper bound of that band
        data_year: Tax year of the cohort table to evaluate against
    """
    policy: PolicyChange = field(default_factory=PolicyChange)
    behavioral: BehavioralParams = DEFAULT_BEHAVIORAL_PARAMS
    time_horizon: int = 5
    middle_income_min: float = 75_000
    middle_income_max: float = 200_000
    data_year: int = DEFAULT_DATA_YEAR

    def with_policy(self, **changes) -> "ModelInput":
        """Copy with some policy fields overridden."""
        return replace(self, policy=replace(self.policy, **changes))

    def with_behavioral(self, **changes) -> "ModelInput":
        """Copy with some behavioral fields overridden."""
        return replace(self, behavioral=replace(self.behavioral, **changes))


DEFAULT_POLICY = PolicyChange()
DEFAULT_INPUT = ModelInput(policy=DEFAULT_POLICY, behavioral=DEFAULT_BEHAVIORAL_PARAMS)

NOOP_POLICY = PolicyChange(
    surcharge_rate=0.0,
    flat_rate_change=0.0,
    include_nyc=False,
    nyc_surcharge_rate=0.0,
)


# =============================================================================
# DICTIONARY CONVERSION
# =============================================================================

# camelCase names accepted from the web calculator payloads
_CAMEL_CASE_ALIASES = {
    "surchargeRate": "surcharge_rate",
    "surchargeThreshold": "surcharge_threshold",
    "flatRateChange": "flat_rate_change",
    "includeNyc": "include_nyc",
    "nycSurchargeRate": "nyc_surcharge_rate",
    "nycSurchargeThreshold": "nyc_surcharge_threshold",
    "baseMigrationRate": "base_migration_rate",
    "migrationElasticity": "migration_elasticity",
    "maxMigrationShare": "max_migration_share",
    "thresholdDollars": "threshold_dollars",
    "logisticSlope": "logistic_slope",
    "year1Share": "year1_share",
    "year3Share": "year3_share",
    "year5Share": "year5_share",
    "replacementRate": "replacement_rate",
    "timeHorizon": "time_horizon",
    "middleIncomeMin": "middle_income_min",
    "middleIncomeMax": "middle_income_max",
    "dataYear": "data_year",
}


def _normalize_keys(section: Dict[str, Any], allowed: set, section_name: str) -> Dict[str, Any]:
    if not isinstance(section, dict):
        raise ValueError(f"{section_name} section must be an object, got {type(section).__name__}")
    normalized = {}
    for key, value in section.items():
        if key.startswith("_"):
            # Annotations such as _sources
            continue
        name = _CAMEL_CASE_ALIASES.get(key, key)
        if name not in allowed:
            raise ValueError(f"Unknown {section_name} option: {key!r}")
        normalized[name] = value
    return normalized


def policy_from_dict(data: Dict[str, Any]) -> PolicyChange:
    """Build a PolicyChange, filling unspecified options from DEFAULT_POLICY."""
    allowed = {f.name for f in fields(PolicyChange)}
    return replace(DEFAULT_POLICY, **_normalize_keys(data, allowed, "policy"))


def behavioral_from_dict(data: Dict[str, Any]) -> BehavioralParams:
    """Build BehavioralParams, filling unspecified options from the defaults."""
    allowed = {f.name for f in fields(BehavioralParams)}
    options = _normalize_keys(data, allowed, "behavioral")
    if "model" in options:
        try:
            options["model"] = BehavioralModelType(options["model"])
        except ValueError:
            valid = [m.value for m in BehavioralModelType]
            raise ValueError(f"Unknown behavioral model {options['model']!r}; expected one of {valid}")
    return replace(DEFAULT_BEHAVIORAL_PARAMS, **options)


def model_input_from_dict(data: Dict[str, Any]) -> ModelInput:
    """
    Build a ModelInput from a nested dictionary.

    Accepts "policy" and "behavioral" sections plus top-level run options.
    A "middle_income_range" section with "min"/"max" keys is also accepted,
    matching the assumptions JSON export. Keys may be snake_case or camelCase.

    Raises:
        ValueError: For unknown options, an unknown behavioral model, or a
            section that is not an object (or a range missing min/max)
    """
    top_level = {"time_horizon", "middle_income_min", "middle_income_max", "data_year"}
    options: Dict[str, Any] = {}

    for key, value in data.items():
        if key == "policy":
            options["policy"] = policy_from_dict(value)
        elif key == "behavioral":
            options["behavioral"] = behavioral_from_dict(value)
        elif key in ("middle_income_range", "middleIncomeRange"):
            if not isinstance(value, dict) or not {"min", "max"} <= value.keys():
                raise ValueError(f"{key} must be an object with 'min' and 'max' keys")
            options["middle_income_min"] = value["min"]
            options["middle_income_max"] = value["max"]
        elif key in ("data_sources", "dataSources") or key.startswith("_"):
            continue
        else:
            name = _CAMEL_CASE_ALIASES.get(key, key)
            if name not in top_level:
                raise ValueError(f"Unknown model input option: {key!r}")
            options[name] = value

    return replace(DEFAULT_INPUT, **options)


def model_input_to_dict(model_input: ModelInput) -> Dict[str, Any]:
    """Plain-dictionary form of a ModelInput (snake_case keys)."""
    behavioral = asdict(model_input.behavioral)
    behavioral["model"] = model_input.behavioral.model.value
    return {
        "policy": asdict(model_input.policy),
        "behavioral": behavioral,
        "time_horizon": model_input.time_horizon,
        "middle_income_range": {
            "min": model_input.middle_income_min,
            "max": model_input.middle_income_max,
        },
        "data_year": model_input.data_year,
    }
