"""
Connection settings and logging setup.
"""

import logging
import os
from dataclasses import dataclass, fields

from sqlalchemy.engine import URL

ENV_PREFIX = "PYCATALOG_"

ENV_VARIABLES = {
    "host": "DB_HOST",
    "port": "DB_PORT",
    "user": "USER",
    "password": "PASSWORD",
    "database": "DATABASE",
}


@dataclass
class ConnectionSettings:
    """Credentials for the MySQL server whose catalog is read."""

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str | None = None

    def __post_init__(self):
        try:
            self.port = int(self.port)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {self.port!r}") from None

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "ConnectionSettings":
        """
        Load settings from PYCATALOG_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Values that take precedence over the environment;
                         None values are ignored

        Returns:
            ConnectionSettings instance
        """
        environ = os.environ if environ is None else environ
        values = {}
        for setting in fields(cls):
            name = ENV_PREFIX + ENV_VARIABLES[setting.name]
            if name in environ:
                values[setting.name] = environ[name]
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def url(self) -> URL:
        """Get the SQLAlchemy URL for the PyMySQL driver."""
        return URL.create(
            "mysql+pymysql",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
        )


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
