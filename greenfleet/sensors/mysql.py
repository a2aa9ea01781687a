from datetime import date
from typing import Any, List, Optional, Type, Union
import logging

import pymysql

from greenfleet.shared.database import DBConfig, connect
from greenfleet.shared.errors import Unavailable
from greenfleet.shared.models import Number, Quantity, ReadingSeries
from greenfleet.shared.parsing import parse_numbers
from .base import SensorSource

logger = logging.getLogger(__name__)


class MySQLSensor(SensorSource):
    """Date-indexed readings from the ``sensor_readings`` table.

    Values are stored as text and go through the numeric parser, so rows
    holding 'null' or garbage are skipped.
    """

    BASE_QUERY = """
        SELECT timestamp, value
        FROM sensor_readings
        WHERE {where_clause}
        ORDER BY timestamp {order}
    """

    def __init__(
        self,
        quantity: Union[Quantity, str],
        db_config: DBConfig,
        metric: Optional[str] = None,
        location: Optional[str] = None,
        kind: Type = float,
    ):
        """
        Args:
            quantity: Quantity this sensor reports.
            db_config: Database connection configuration.
            metric: Metric name in the table; defaults to the quantity name.
            location: Optional location filter.
            kind: ``int`` or ``float``.
        """
        super().__init__(quantity)
        self.db_config = db_config
        self.metric = metric or self.quantity.value
        self.location = location
        self.kind = kind
        logger.info(f"Initialized MySQLSensor for {self.quantity.value} (metric={self.metric}, location={self.location})")

    def _build_query(self, day: Optional[str] = None, latest: bool = False):
        conditions = ["metric = %s"]
        params: List[Any] = [self.metric]

        if self.location:
            conditions.append("location = %s")
            params.append(self.location)
        if day is not None:
            conditions.append("DATE(timestamp) = %s")
            params.append(day)

        query = self.BASE_QUERY.format(
            where_clause=" AND ".join(conditions),
            order="DESC" if latest else "ASC",
        )
        if latest:
            # newest parsable row may not be the newest row
            query += " LIMIT %s"
            params.append(50)
        return query, params

    def _fetch_rows(self, query: str, params: List[Any]) -> List[dict]:
        connection = None
        try:
            connection = connect(self.db_config)
            with connection.cursor() as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall()
        except pymysql.MySQLError as e:
            logger.error(f"Error reading {self.metric} from MySQL: {e}")
            raise Unavailable(f"Cannot read {self.metric} from MySQL: {e}", self.quantity.value) from e
        finally:
            if connection:
                connection.close()
        return list(rows)

    def _fetch(self, query: str, params: List[Any]) -> List[Number]:
        rows = self._fetch_rows(query, params)
        return parse_numbers(
            (str(row["value"]) for row in rows if row["value"] is not None),
            self.kind,
        )

    def current(self):
        query, params = self._build_query(latest=True)
        # rows come newest first; a row may hold several tokens
        for row in self._fetch_rows(query, params):
            if row["value"] is None:
                continue
            values = parse_numbers([str(row["value"])], self.kind)
            if values:
                return ReadingSeries(self.quantity, tuple(values)).latest()
        return ReadingSeries(self.quantity).latest()

    def read_day(self, day: Optional[str] = None) -> ReadingSeries:
        day = day or date.today().isoformat()
        query, params = self._build_query(day=day)
        return ReadingSeries(self.quantity, tuple(self._fetch(query, params)))

    def read_all(self) -> ReadingSeries:
        query, params = self._build_query()
        return ReadingSeries(self.quantity, tuple(self._fetch(query, params)))

    def check_health(self) -> bool:
        """Check if we can connect to the database and execute a simple query"""
        connection = None
        try:
            connection = connect(self.db_config)
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            return True
        except pymysql.MySQLError as e:
            logger.error(f"MySQL health check failed: {e}")
            return False
        finally:
            if connection:
                connection.close()
