"""Base data source interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from sqlglot import exp


class QueryExecutor(ABC):
    """Anything that can run a catalog query and return its rows."""

    @abstractmethod
    async def execute(self, query: exp.Expression) -> List[Mapping[str, Any]]:
        """Execute a query.

        Args:
            query: sqlglot expression to run

        Returns:
            Rows as mappings keyed by output column name
        """
        pass


class DataSource(QueryExecutor):
    """Abstract base class for connected data sources."""

    dialect = "postgres"

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize data source.

        Args:
            name: Unique name for this data source
            config: Configuration dictionary
        """
        self.name = name
        self.config = config
        self._connected = False

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the data source."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the data source."""
        pass

    def render(self, query: exp.Expression) -> str:
        """Render a query as SQL text for this data source's dialect."""
        return query.sql(dialect=self.dialect)

    def is_connected(self) -> bool:
        """Check if data source is connected.

        Returns:
            True if connected, False otherwise
        """
        return self._connected

    def ensure_connected(self) -> None:
        """Ensure data source is connected.

        Raises:
            ConnectionError: If connection cannot be established
        """
        if not self.is_connected():
            self.connect()

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
