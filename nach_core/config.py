"""Configuration management for nach-core."""

from dataclasses import dataclass, field

from nach_core.exceptions import ConfigurationError
from nach_core.models.enums import AcceptanceRule


@dataclass
class UploadConfig:
    """Limits applied to an uploaded batch file before it is parsed."""

    max_upload_size: int = 10 * 1024 * 1024
    allowed_extensions: tuple[str, ...] = ("txt",)

    def is_extension_allowed(self, extension: str) -> bool:
        """Case-insensitive allow-list check."""
        return extension.lower() in {ext.lower().lstrip(".") for ext in self.allowed_extensions}


@dataclass
class ParserConfig:
    """Line and file parsing configuration."""

    delimiter: str = "|"
    max_lines: int = 100_000
    encoding: str = "utf-8"
    acceptance_rule: AcceptanceRule = AcceptanceRule.MINIMAL


@dataclass
class ReprocessConfig:
    """Reprocessing request limits and defaults."""

    max_batch_size: int = 1000
    default_actor: str = "SYSTEM"
    default_reason: str = "Manual reprocessing"
    max_workers: int = 1


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "nach"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class NachConfig:
    """Main configuration for nach-core."""

    upload: UploadConfig = field(default_factory=UploadConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    reprocess: ReprocessConfig = field(default_factory=ReprocessConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    log_level: str = "INFO"

    def validate(self) -> "NachConfig":
        """Check limits and return self; raises ConfigurationError on the first problem set."""
        errors: list[str] = []
        if self.upload.max_upload_size <= 0:
            errors.append("Maximum upload size must be positive")
        if not self.upload.allowed_extensions:
            errors.append("At least one upload extension must be allowed")
        if self.parser.max_lines <= 0:
            errors.append("Parser line limit must be positive")
        if not self.parser.delimiter:
            errors.append("Parser delimiter cannot be empty")
        if self.reprocess.max_batch_size <= 0:
            errors.append("Reprocess batch size must be positive")
        if self.reprocess.max_workers <= 0:
            errors.append("Reprocess worker count must be positive")
        if errors:
            raise ConfigurationError("Invalid configuration: " + "; ".join(errors))
        return self

    @classmethod
    def from_env(cls) -> "NachConfig":
        """Create config from environment variables."""
        import os

        extensions = os.getenv("NACH_ALLOWED_EXTENSIONS", "txt")
        upload = UploadConfig(
            max_upload_size=int(os.getenv("NACH_MAX_UPLOAD_SIZE", str(10 * 1024 * 1024))),
            allowed_extensions=tuple(e.strip() for e in extensions.split(",") if e.strip()),
        )

        try:
            rule = AcceptanceRule(os.getenv("NACH_ACCEPTANCE_RULE", "MINIMAL").upper())
        except ValueError as e:
            raise ConfigurationError(f"Unknown acceptance rule: {e}") from e

        parser = ParserConfig(
            delimiter=os.getenv("NACH_DELIMITER", "|"),
            max_lines=int(os.getenv("NACH_MAX_LINES", "100000")),
            encoding=os.getenv("NACH_ENCODING", "utf-8"),
            acceptance_rule=rule,
        )

        reprocess = ReprocessConfig(
            max_batch_size=int(os.getenv("NACH_REPROCESS_MAX_BATCH", "1000")),
            default_actor=os.getenv("NACH_REPROCESS_ACTOR", "SYSTEM"),
            default_reason=os.getenv("NACH_REPROCESS_REASON", "Manual reprocessing"),
            max_workers=int(os.getenv("NACH_REPROCESS_WORKERS", "1")),
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", "nach"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        return cls(
            upload=upload,
            parser=parser,
            reprocess=reprocess,
            postgres=postgres,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        ).validate()
