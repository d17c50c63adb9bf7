from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)
from typing import Optional, Tuple, Type
from urllib.parse import quote_plus
import os

from flapmyport import __version__

DEFAULT_CONFIG_FILE = "settings.conf"


def config_file_path() -> str:
    """TOML config location; the CLI's -f flag sets CONFIG_FILE before settings load."""
    return os.environ.get("CONFIG_FILE", DEFAULT_CONFIG_FILE)


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "FlapMyPort API"
    APP_VERSION: str = __version__
    VERBOSE: bool = False
    LOGFILE: str = Field("", validation_alias=AliasChoices("LOGFILE", "LogFilename"))  # empty = stderr

    # Listener
    # Older settings.conf files use the CamelCase keys (ListenPort, DBHost, LogFilename)
    LISTEN_ADDRESS: str = Field(
        "0.0.0.0", validation_alias=AliasChoices("LISTEN_ADDRESS", "ListenAddress")
    )
    LISTEN_PORT: int = Field(8080, validation_alias=AliasChoices("LISTEN_PORT", "ListenPort"))

    # Database (the `ports` table is written by snmpflapd)
    DBHOST: str = Field("localhost", validation_alias=AliasChoices("DBHOST", "DBHost"))
    DBNAME: str = Field("snmpflapd", validation_alias=AliasChoices("DBNAME", "DBName"))
    DBUSER: str = Field("root", validation_alias=AliasChoices("DBUSER", "DBUser"))
    DBPASSWORD: str = Field("", validation_alias=AliasChoices("DBPASSWORD", "DBPassword"))
    DATABASE_URL: Optional[str] = None  # overrides the DB* values when set

    # Queries
    SQL_ROWS_LIMIT: int = Field(100000, ge=1)
    PORT_FLAPS_LIMIT: int = Field(100, ge=1)
    DEFAULT_REVIEW_INTERVAL_SECONDS: int = Field(3600, ge=1)

    # Flap chart
    FLAP_CHART_WIDTH: int = Field(333, ge=2)
    FLAP_CHART_HEIGHT: int = Field(10, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over the config file, the config file over defaults.
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=config_file_path()),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return "mysql+aiomysql://{}:{}@{}/{}".format(
            quote_plus(self.DBUSER),
            quote_plus(self.DBPASSWORD),
            self.DBHOST,
            self.DBNAME,
        )


settings = Settings()
