"""Destinations for cycle outcomes: the log, a terminal table, MQTT."""

import json
import logging
import threading
import time
from typing import List, Optional

import paho.mqtt.client as mqtt
from paho.mqtt.enums import CallbackAPIVersion
from rich.console import Console
from rich.table import Table

from greenfleet.shared.models import Command, Quantity
from greenfleet.shared.mqtt import MQTTConfig, create_command_payload
from .coordinator import ProductionSummary, UnitOutcome

logger = logging.getLogger(__name__)

UNITS = {
    Quantity.WIND_SPEED: "m/s",
    Quantity.BRIGHTNESS: "lux",
    Quantity.FLOW: "m3/s",
}


def describe_reading(outcome: UnitOutcome) -> str:
    if outcome.reading is None:
        return "---"
    unit = UNITS.get(outcome.reading.quantity, "")
    return f"{outcome.reading.quantity.value} {outcome.reading.value}{' ' + unit if unit else ''}"


class OutcomeSink:
    """Base sink; subclasses override what they care about."""

    def publish_outcomes(self, outcomes: List[UnitOutcome]):
        pass

    def publish_production(self, summaries: List[ProductionSummary]):
        pass

    def close(self):
        pass


class LogSink(OutcomeSink):
    """Writes outcomes to the application log."""

    def __init__(self, logger_name: str = "greenfleet.fleet"):
        self.log = logging.getLogger(logger_name)

    def publish_outcomes(self, outcomes: List[UnitOutcome]):
        for outcome in outcomes:
            if outcome.known:
                self.log.info(f"{outcome.unit}: {outcome.command_text} ({describe_reading(outcome)})")
            else:
                self.log.warning(f"{outcome.unit}: state unknown ({outcome.error})")

    def publish_production(self, summaries: List[ProductionSummary]):
        for summary in summaries:
            if summary.error:
                self.log.warning(f"{summary.unit}: production unavailable ({summary.error})")
            else:
                self.log.info(f"{summary.unit}: day production {summary.day}, total production {summary.total}")


class ConsoleSink(OutcomeSink):
    """Renders outcomes as tables using Rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def publish_outcomes(self, outcomes: List[UnitOutcome]):
        table = Table(title="FLEET COMMANDS", show_header=True, header_style="bold cyan")
        table.add_column("Unit", style="white")
        table.add_column("Command", style="white")
        table.add_column("Reading", style="white")

        for outcome in outcomes:
            if outcome.known:
                style = "red" if outcome.command is Command.OFF else "green"
                table.add_row(outcome.unit.title(), outcome.command_text, describe_reading(outcome), style=style)
            else:
                table.add_row(outcome.unit.title(), "UNKNOWN", outcome.error or "---", style="yellow")

        self.console.print(table)

    def publish_production(self, summaries: List[ProductionSummary]):
        table = Table(title="PRODUCTION", show_header=True, header_style="bold cyan")
        table.add_column("Unit", style="white")
        table.add_column("Day", style="white", justify="right")
        table.add_column("Total", style="white", justify="right")

        for summary in summaries:
            if summary.error:
                table.add_row(summary.unit.title(), "---", "---", style="yellow")
            else:
                table.add_row(summary.unit.title(), str(summary.day), str(summary.total))

        self.console.print(table)


class MQTTSink(OutcomeSink):
    """Publishes outcomes to an MQTT broker."""

    def __init__(self, config: MQTTConfig):
        """Initialize MQTT sink.

        Args:
            config: MQTT configuration.
        """
        self.config = config
        self.client: Optional[mqtt.Client] = None
        self._connected = False
        self._connect_event = threading.Event()

    def _on_connect(self, client, userdata, flags, reason_code, properties):
        """Handle connection to broker."""
        if reason_code == 0:
            logger.info(f"Connected to MQTT broker at {self.config.broker}:{self.config.port}")
            self._connected = True
        else:
            logger.error(f"Failed to connect to MQTT broker: {reason_code}")
            self._connected = False
        self._connect_event.set()

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties):
        """Handle disconnection from broker."""
        self._connected = False
        if reason_code != 0:
            logger.warning(f"Unexpected MQTT disconnection (reason={reason_code})")
        else:
            logger.info("Disconnected from MQTT broker")

    def connect(self, timeout: float = 10.0) -> bool:
        """Connect to the MQTT broker.

        Args:
            timeout: Timeout in seconds to wait for connection.

        Returns:
            True if connected successfully, False otherwise.
        """
        self._connect_event.clear()

        self.client = mqtt.Client(
            callback_api_version=CallbackAPIVersion.VERSION2,
            client_id=self.config.client_id,
        )
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect

        logger.info(f"Connecting to MQTT broker at {self.config.broker}:{self.config.port}")

        try:
            self.client.connect(self.config.broker, self.config.port, keepalive=self.config.keepalive)
            self.client.loop_start()

            if self._connect_event.wait(timeout=timeout):
                return self._connected
            logger.error("Timeout waiting for MQTT connection")
            return False
        except OSError as e:
            logger.error(f"Failed to connect to MQTT broker: {e}")
            return False

    def close(self):
        """Disconnect from the MQTT broker."""
        if self.client:
            self.client.loop_stop()
            self.client.disconnect()
            self.client = None
            self._connected = False

    def _publish(self, topic: str, payload: str):
        result = self.client.publish(topic, payload, qos=self.config.qos)
        if result.rc == mqtt.MQTT_ERR_SUCCESS:
            logger.debug(f"Published to {topic}: {payload}")
        else:
            logger.warning(f"Failed to publish to {topic}: rc={result.rc}")

    def publish_outcomes(self, outcomes: List[UnitOutcome]):
        if not self._connected or not self.client:
            logger.warning("Not connected to MQTT broker, cannot publish")
            return

        for outcome in outcomes:
            payload = create_command_payload(
                unit=outcome.unit,
                command=str(outcome.command) if outcome.known else None,
                reading=outcome.reading.value if outcome.reading else None,
                error=outcome.error,
            )
            self._publish(f"{self.config.topic_prefix}/{outcome.unit}/command", payload)

    def publish_production(self, summaries: List[ProductionSummary]):
        if not self._connected or not self.client:
            logger.warning("Not connected to MQTT broker, cannot publish")
            return

        for summary in summaries:
            payload = json.dumps({
                "unit": summary.unit,
                "day": summary.day,
                "total": summary.total,
                "error": summary.error,
                "ts": time.time(),
            })
            self._publish(f"{self.config.topic_prefix}/{summary.unit}/production", payload)

    @property
    def is_connected(self) -> bool:
        """Check if connected to MQTT broker."""
        return self._connected
