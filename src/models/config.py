"""Model with service configuration."""

from typing import Optional
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
    FilePath,
    PositiveFloat,
    PositiveInt,
    SecretStr,
)

from typing_extensions import Self, Literal

import constants
from utils import checks


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class TLSConfiguration(ConfigurationBase):
    """TLS configuration."""

    tls_certificate_path: Optional[FilePath] = None
    tls_key_path: Optional[FilePath] = None
    tls_key_password: Optional[FilePath] = None

    @model_validator(mode="after")
    def check_tls_configuration(self) -> Self:
        """Check that certificate and key are configured together."""
        if (self.tls_certificate_path is None) != (self.tls_key_path is None):
            raise ValueError(
                "Both TLS certificate and TLS key need to be specified"
            )
        return self


class CORSConfiguration(ConfigurationBase):
    """CORS configuration."""

    allow_origins: list[str] = [
        "*"
    ]  # not AnyHttpUrl: we need to support "*" that is not valid URL
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @model_validator(mode="after")
    def check_cors_configuration(self) -> Self:
        """Check CORS configuration."""
        # credentials are not allowed with wildcard origins per CORS/Fetch spec.
        # see https://fastapi.tiangolo.com/tutorial/cors/
        if self.allow_credentials and "*" in self.allow_origins:
            raise ValueError(
                "Invalid CORS configuration: allow_credentials can not be set to true when "
                "allow origins contains '*' wildcard."
                "Use explicit origins or disable credential."
            )
        return self


class ServiceConfiguration(ConfigurationBase):
    """Service configuration."""

    host: str = "localhost"
    port: PositiveInt = 8080
    workers: PositiveInt = 1
    color_log: bool = True
    access_log: bool = True
    tls_config: TLSConfiguration = Field(default_factory=TLSConfiguration)
    cors: CORSConfiguration = Field(default_factory=CORSConfiguration)

    @model_validator(mode="after")
    def check_service_configuration(self) -> Self:
        """Check service configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        # pending requests live in process memory, so they can't be shared
        # between several uvicorn workers
        if self.workers > 1:
            raise ValueError(
                "Only one worker is supported, pending requests are kept in process memory"
            )
        return self


class SQLiteDatabaseConfiguration(ConfigurationBase):
    """SQLite database configuration."""

    db_path: str

    @model_validator(mode="after")
    def check_db_directory(self) -> Self:
        """Check that the database file can be created."""
        if self.db_path != ":memory:":
            checks.directory_check(
                Path(self.db_path).absolute().parent, "SQLite database directory"
            )
        return self


class SummaryCacheConfiguration(ConfigurationBase):
    """Summary cache configuration."""

    type: Literal["noop", "memory", "sqlite"] = constants.CACHE_TYPE_MEMORY
    max_entries: PositiveInt = constants.DEFAULT_CACHE_MAX_ENTRIES
    expiry_days: PositiveFloat = constants.DEFAULT_CACHE_EXPIRY_DAYS
    sqlite: Optional[SQLiteDatabaseConfiguration] = None

    @model_validator(mode="after")
    def check_cache_configuration(self) -> Self:
        """Check summary cache configuration."""
        match self.type:
            case constants.CACHE_TYPE_SQLITE:
                if self.sqlite is None:
                    raise ValueError("SQLite cache is selected, but not configured")
            case _:
                if self.sqlite is not None:
                    raise ValueError(
                        f"SQLite configuration provided, but cache type is '{self.type}'"
                    )
        return self

    @property
    def expiry_seconds(self) -> float:
        """Return cache expiry converted to seconds."""
        return self.expiry_days * constants.SECONDS_PER_DAY


class OrchestratorConfiguration(ConfigurationBase):
    """Request orchestrator configuration."""

    retention_seconds: PositiveInt = constants.DEFAULT_REQUEST_RETENTION_SECONDS
    cleanup_interval_seconds: PositiveFloat = (
        constants.DEFAULT_CLEANUP_INTERVAL_SECONDS
    )
    # None means that no timeout is enforced by the HTTP transport
    provider_timeout: Optional[PositiveFloat] = (
        constants.DEFAULT_PROVIDER_TIMEOUT_SECONDS
    )


class ContextConfiguration(ConfigurationBase):
    """Thresholds used to decide between direct and chunked context handling."""

    chars_per_token: PositiveInt = constants.DEFAULT_CHARS_PER_TOKEN
    direct_threshold_tokens: PositiveInt = constants.DEFAULT_DIRECT_THRESHOLD_TOKENS
    chunk_budget_tokens: PositiveInt = constants.DEFAULT_CHUNK_BUDGET_TOKENS

    @model_validator(mode="after")
    def check_context_configuration(self) -> Self:
        """Check that chunk budget fits under direct threshold."""
        if self.chunk_budget_tokens > self.direct_threshold_tokens:
            raise ValueError(
                "Chunk budget can not be larger than direct context threshold"
            )
        return self


class ProviderDefaults(ConfigurationBase):
    """Operator provided defaults for one LLM provider.

    Values are used when summarization or chat request does not contain them.
    """

    api_key: Optional[SecretStr] = None
    api_key_path: Optional[FilePath] = None
    api_url: Optional[str] = None
    virtual_key: Optional[SecretStr] = None
    model: Optional[str] = None

    @model_validator(mode="after")
    def check_api_key(self) -> Self:
        """Read API key from file when path is specified."""
        if self.api_key is not None and self.api_key_path is not None:
            raise ValueError("Only one of api_key and api_key_path can be set")
        if self.api_key_path is not None:
            self.api_key = SecretStr(
                checks.read_secret_file(self.api_key_path, "API key file")
            )
        return self


class ProvidersConfiguration(ConfigurationBase):
    """Defaults for all supported LLM providers."""

    claude: ProviderDefaults = Field(default_factory=ProviderDefaults)
    openai: ProviderDefaults = Field(default_factory=ProviderDefaults)
    openrouter: ProviderDefaults = Field(default_factory=ProviderDefaults)
    portkey: ProviderDefaults = Field(default_factory=ProviderDefaults)

    def for_provider(self, provider: str) -> ProviderDefaults:
        """Return defaults for given provider."""
        if provider not in constants.SUPPORTED_PROVIDERS:
            raise ValueError(f"Unknown API provider: {provider}")
        return getattr(self, provider)


class TargetConfiguration(ConfigurationBase):
    """Content source that can be listed and summarized."""

    id: str
    url: str
    title: str = "Untitled"


class Configuration(ConfigurationBase):
    """Global service configuration."""

    name: str
    service: ServiceConfiguration = Field(default_factory=ServiceConfiguration)
    default_language: Literal["chinese", "english"] = constants.DEFAULT_LANGUAGE
    summary_cache: SummaryCacheConfiguration = Field(
        default_factory=SummaryCacheConfiguration
    )
    orchestrator: OrchestratorConfiguration = Field(
        default_factory=OrchestratorConfiguration
    )
    context: ContextConfiguration = Field(default_factory=ContextConfiguration)
    providers: ProvidersConfiguration = Field(default_factory=ProvidersConfiguration)
    targets: list[TargetConfiguration] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_targets(self) -> Self:
        """Check that target IDs are unique."""
        ids = [target.id for target in self.targets]
        if len(ids) != len(set(ids)):
            raise ValueError("Target IDs must be unique")
        return self

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
