"""YAML config loader — reads audit-config.yml into SuiteSettings."""

from pathlib import Path

import yaml

from pqa.schemas.config import SuiteSettings


def load_config(path: str | Path) -> SuiteSettings:
    """Load and validate an audit config file.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # A list whose items are all commented out loads as None.
    for key in ("lighthouse_flags",):
        if key in raw and raw[key] is None:
            raw[key] = []
    # A missing page list falls back to the built-in pages.
    if "pages" in raw and raw["pages"] is None:
        del raw["pages"]
    elif isinstance(raw.get("pages"), list):
        raw["pages"] = [item for item in raw["pages"] if item]

    return SuiteSettings(**raw)
