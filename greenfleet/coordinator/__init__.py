"""Fleet coordination service."""

from .coordinator import FleetCoordinator, ProductionSummary, UnitOutcome
from .sinks import ConsoleSink, LogSink, MQTTSink, OutcomeSink


def main():
    """Entry point for coordinator service.

    Runs a single decision cycle and production report. GREENFLEET_DAY
    selects the day for the report; the latest day is used otherwise.
    """
    import os
    from greenfleet.config import build_units, load_config
    from greenfleet.shared.logging import setup_logging

    config = load_config(os.getenv("GREENFLEET_CONFIG"))
    setup_logging(config.log_level)

    sinks = [LogSink()]
    if config.display.console:
        sinks.append(ConsoleSink())
    if config.mqtt:
        mqtt_sink = MQTTSink(config.mqtt)
        if mqtt_sink.connect():
            sinks.append(mqtt_sink)

    coordinator = FleetCoordinator(build_units(config), sinks)

    try:
        coordinator.run_cycle()
        coordinator.production_report(os.getenv("GREENFLEET_DAY"))
    except KeyboardInterrupt:
        pass
    finally:
        coordinator.close()


__all__ = [
    "FleetCoordinator",
    "ProductionSummary",
    "UnitOutcome",
    "ConsoleSink",
    "LogSink",
    "MQTTSink",
    "OutcomeSink",
    "main",
]
