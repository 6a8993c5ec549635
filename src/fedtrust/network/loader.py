# -*- encoding: utf-8 -*-
"""
fedtrust Network Config Loader - Builds TrustNetwork snapshots from config.

Document format:
    {
        "network_id": "fed-1",                      # required
        "topology_type": "hub-and-spoke",           # default hub-and-spoke
        "registry_version": "2025-01-15T10:00:00Z", # optional ISO-8601
        "providers": {
            "hub-a": {"issuer": "https://hub-a.example", "role": "hub"},
            "b": {"issuer": "https://b.example", "jwks_uri": "https://b.example/jwks"}
        },
        "trust_relationships": [
            {"from": "b", "to": "hub-a", "level": "explicit"}
        ],
        "metadata": {"owner": "ops"}                # optional
    }

Malformed documents raise NetworkConfigError. Malformed individual entries
(a provider without issuer, an edge with an unknown level) are skipped with
a warning so one bad line does not take the whole network down.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from fedtrust.exceptions import NetworkConfigError
from fedtrust.network.model import (
    DEFAULT_TOPOLOGY_TYPE,
    TrustLevel,
    TrustNetwork,
    TrustNetworkBuilder,
)

logger = logging.getLogger(__name__)

# Provider entry keys that are not copied into node metadata
_PROVIDER_RESERVED_KEYS = frozenset({"issuer", "role", "metadata"})


def parse_registry_version(value: Any) -> Optional[datetime]:
    """
    Parse a registry_version timestamp.

    Accepts ISO-8601 strings, including a trailing "Z" for UTC.

    Returns:
        The parsed datetime, or None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class NetworkConfigLoader:
    """
    Loads trust networks from configuration documents.

    Sources:
    - Python dicts (already-parsed documents)
    - JSON strings
    - JSON files on disk

    Usage:
        loader = NetworkConfigLoader()
        network = loader.load_from_file("networks/fed-1.json")
    """

    def load_from_file(self, path: Union[str, Path]) -> TrustNetwork:
        """
        Load a network from a JSON file.

        Raises:
            NetworkConfigError: If the file is missing, unreadable or malformed
        """
        file_path = Path(path)
        logger.info("Loading trust network from %s", file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NetworkConfigError(
                f"Cannot read network config {file_path}: {e}",
                source=str(file_path),
            ) from e
        return self.load_from_json_string(text, source=str(file_path))

    def load_from_json_string(self, text: str, source: str = "<string>") -> TrustNetwork:
        """
        Load a network from a JSON string.

        Raises:
            NetworkConfigError: If the text is not a JSON object or is malformed
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise NetworkConfigError(
                f"Unparsable network config: {e}", source=source,
            ) from e
        return self.load_from_dict(data, source=source)

    def load_from_dict(self, data: Any, source: str = "<dict>") -> TrustNetwork:
        """
        Build a network from a parsed configuration document.

        Raises:
            NetworkConfigError: If data is not a dict or lacks network_id
        """
        if not isinstance(data, dict):
            raise NetworkConfigError(
                f"Network config must be a JSON object, got {type(data).__name__}",
                source=source,
            )

        network_id = data.get("network_id")
        if not isinstance(network_id, str) or not network_id:
            raise NetworkConfigError(
                "Network config is missing network_id", source=source,
            )

        topology_type = data.get("topology_type") or DEFAULT_TOPOLOGY_TYPE
        builder = TrustNetworkBuilder(network_id, str(topology_type))

        if data.get("registry_version") is not None:
            version = parse_registry_version(data["registry_version"])
            if version is None:
                logger.warning(
                    "Failed to parse registry_version %r for network %s",
                    data["registry_version"], network_id,
                )
            builder.version(version)

        self._load_providers(data.get("providers"), builder, network_id)
        self._load_trust_relationships(data.get("trust_relationships"), builder, network_id)

        metadata = data.get("metadata")
        if isinstance(metadata, dict):
            for key, value in metadata.items():
                builder.metadata(str(key), str(value))

        network = builder.build()
        logger.info(
            "Loaded trust network %s (%s): %d providers, %d trust relationships",
            network.network_id, network.topology_type,
            network.provider_count(), network.edge_count(),
        )
        return network

    def _load_providers(
        self,
        providers: Any,
        builder: TrustNetworkBuilder,
        network_id: str,
    ) -> None:
        if not isinstance(providers, dict):
            if providers is not None:
                logger.warning("Ignoring non-object providers in network %s", network_id)
            return

        for provider_id, entry in providers.items():
            if not isinstance(provider_id, str) or not provider_id:
                logger.warning("Skipping provider %r: provider id must be a non-empty string", provider_id)
                continue
            if not isinstance(entry, dict):
                logger.warning("Skipping provider %s: entry is not an object", provider_id)
                continue
            issuer = entry.get("issuer")
            if not isinstance(issuer, str) or not issuer:
                logger.warning("Skipping provider %s: missing issuer", provider_id)
                continue

            metadata = {
                key: value for key, value in entry.items()
                if key not in _PROVIDER_RESERVED_KEYS and isinstance(value, str)
            }
            nested = entry.get("metadata")
            if isinstance(nested, dict):
                metadata.update(nested)

            role = entry.get("role")
            builder.add_provider(
                provider_id,
                issuer=issuer,
                role=role if isinstance(role, str) else None,
                metadata=metadata,
            )
            logger.debug("Loaded provider %s (issuer=%s)", provider_id, issuer)

    def _load_trust_relationships(
        self,
        relationships: Any,
        builder: TrustNetworkBuilder,
        network_id: str,
    ) -> None:
        if not isinstance(relationships, list):
            if relationships is not None:
                logger.warning(
                    "Ignoring non-array trust_relationships in network %s", network_id,
                )
            return

        for entry in relationships:
            if not isinstance(entry, dict):
                continue
            from_provider = entry.get("from")
            to_provider = entry.get("to")
            if not from_provider or not to_provider:
                continue
            level_str = entry.get("level") or TrustLevel.EXPLICIT.value
            try:
                level = TrustLevel.parse(str(level_str))
            except ValueError:
                logger.warning(
                    "Invalid trust level %r for relationship %s → %s; skipping",
                    level_str, from_provider, to_provider,
                )
                continue
            builder.add_trust_relationship(str(from_provider), str(to_provider), level)
