"""Presence check of the fields a stage requires."""

from pipeline_console.domain.entities.configuration import ConfigurationRecord
from pipeline_console.domain.entities.stage import Stage, required_fields


def missing_fields(stage: Stage, config: ConfigurationRecord) -> list[str]:
    """Required fields of the stage whose value is empty, in registry order.

    Only presence is checked; a malformed URL still passes.
    """
    return [name for name in required_fields(stage) if not getattr(config, name)]
