"""Configuration schema of the `[niribar]` section."""

from .constants import DEFAULT_CONNECT_RETRIES
from .validation import ConfigField, ConfigItems

__all__ = ["NIRIBAR_CONFIG_SCHEMA", "STRICT_PROJECTION_CHOICES"]

STRICT_PROJECTION_CHOICES = ["auto", "always", "never"]

NIRIBAR_CONFIG_SCHEMA = ConfigItems(
    ConfigField("socket", str, default="", description="Path to the niri socket. Empty means $NIRI_SOCKET"),
    ConfigField("pretty", bool, default=False, description="Indent the JSON documents, for debugging (one document spans several lines)"),
    ConfigField(
        "deduplicate",
        bool,
        default=False,
        description="Skip a document identical to the previous one",
    ),
    ConfigField(
        "strict_projection",
        str,
        default="auto",
        description="Fail on windows referencing unknown workspaces: 'auto' (once fully synced), 'always' or 'never'",
        choices=STRICT_PROJECTION_CHOICES,
    ),
    ConfigField(
        "connect_retries",
        int,
        default=DEFAULT_CONNECT_RETRIES,
        description="Number of connection retries before giving up",
    ),
)
