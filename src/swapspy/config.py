"""
Configuration for swapspy.

The restricted-method table decides which methods may never be mocked. It is
read once from JSON, either the file named by ``SWAPSPY_RESTRICTED_CONFIG`` or
the copy shipped in ``swapspy/data/restricted.json``, and is read-only after
that.
"""

import json
import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from swapspy.utils.env import load_env

RESTRICTED_CONFIG_ENV_VAR = "SWAPSPY_RESTRICTED_CONFIG"
WILDCARD = "*"
OVERRIDE_PREFIX = "^"

logger = logging.getLogger(__name__)


class RestrictionRules(BaseModel):
    """Restricted methods organised by base type name.

    A ``"*"`` entry restricts every method of that type; a method listed as
    ``"^name"`` is exempt from the wildcard.
    """

    model_config = ConfigDict(frozen=True)

    restricted_methods: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Base type name mapped to restricted method names",
    )

    def is_restricted(self, type_name: str, member_name: str) -> bool:
        rules = self.restricted_methods.get(type_name)
        if not rules:
            return False

        wildcard = WILDCARD in rules and f"{OVERRIDE_PREFIX}{member_name}" not in rules
        return wildcard or member_name in rules


def base_type_names(klass: type) -> list[str]:
    """Names a class is looked up under in the restriction table.

    The root package of the defining module and the outermost name of the
    class's qualified name, e.g. ``["myapp", "Outer"]`` for
    ``myapp.models.Outer.Inner``.
    """
    names = [klass.__module__.split(".")[0], klass.__qualname__.split(".")[0]]
    return list(dict.fromkeys(names))


def load_restriction_rules(path: str | Path | None = None) -> RestrictionRules:
    """Read and validate a restriction table.

    Args:
        path: JSON file to read; the packaged defaults when None

    Returns:
        The validated rules

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If the JSON does not match the schema
    """
    if path is None:
        source = resources.files("swapspy").joinpath("data").joinpath("restricted.json")
        raw = source.read_text(encoding="utf-8")
        origin = "packaged defaults"
    else:
        with open(path, encoding="utf-8") as f:
            raw = f.read()
        origin = str(path)

    rules = RestrictionRules.model_validate(json.loads(raw))
    logger.info(
        f"Loaded {len(rules.restricted_methods)} restricted type entries from {origin}"
    )
    return rules


@lru_cache(maxsize=1)
def get_restriction_rules() -> RestrictionRules:
    """The process-wide restriction table, loaded on first use."""
    load_env()
    return load_restriction_rules(os.getenv(RESTRICTED_CONFIG_ENV_VAR) or None)


def is_restricted(klass: type, method_name: str) -> bool:
    """Check whether a method may never be mocked.

    Args:
        klass: The class owning the method
        method_name: The method name

    Returns:
        True if any of the class's base type names restricts the method
    """
    rules = get_restriction_rules()
    return any(
        rules.is_restricted(type_name, method_name)
        for type_name in base_type_names(klass)
    )
