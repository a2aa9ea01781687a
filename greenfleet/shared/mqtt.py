"""MQTT configuration and utilities."""

import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class MQTTConfig:
    """MQTT broker configuration."""
    broker: str = "localhost"
    port: int = 1883
    client_id: str = "greenfleet"
    keepalive: int = 60
    qos: int = 1
    topic_prefix: str = "greenfleet"

    @classmethod
    def from_dict(cls, data: dict) -> "MQTTConfig":
        """Create config from dictionary."""
        return cls(
            broker=data.get("broker", "localhost"),
            port=data.get("port", 1883),
            client_id=data.get("client_id", "greenfleet"),
            keepalive=data.get("keepalive", 60),
            qos=data.get("qos", 1),
            topic_prefix=data.get("topic_prefix", "greenfleet"),
        )


def create_command_payload(
    unit: str,
    command: Optional[str],
    reading: Optional[float] = None,
    error: Optional[str] = None,
    timestamp: Optional[float] = None,
) -> str:
    """Create a standardized MQTT payload for a unit decision.

    Args:
        unit: Unit name (e.g., 'wind').
        command: Command text, or None when the state is unknown.
        reading: Headline reading the decision was based on.
        error: Why the state is unknown, if it is.
        timestamp: Unix timestamp (defaults to current time).

    Returns:
        JSON string payload.
    """
    payload: Dict[str, Any] = {
        "unit": unit,
        "command": command,
        "reading": reading,
        "ts": timestamp or time.time(),
    }
    if error is not None:
        payload["error"] = error
    return json.dumps(payload)
