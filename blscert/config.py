"""Configuration management using msgspec Struct."""

import argparse
import os

import msgspec

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(msgspec.Struct, frozen=True):
    """Application configuration using msgspec Struct."""

    # HTTP server settings
    host: str = "127.0.0.1"
    port: int = 8080
    workers: int = 1

    # Logging
    log_level: str = "INFO"

    # Metrics settings
    metrics_enabled: bool = False
    metrics_host: str = "127.0.0.1"
    metrics_port: int = 8081

    # Upper bound on signatures / public keys per request
    max_batch_size: int = 1024

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # msgspec handles basic type validation, but we need custom validation
        if self.port < 1 or self.port > 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

        if self.metrics_port < 1 or self.metrics_port > 65535:
            raise ValueError(f"metrics_port must be between 1 and 65535, got {self.metrics_port}")

        if self.metrics_enabled and self.metrics_port == self.port and self.metrics_host == self.host:
            raise ValueError(f"metrics_port must differ from port, both are {self.port}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got {self.log_level}")

        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

        if self.max_batch_size < 1:
            raise ValueError(f"max_batch_size must be at least 1, got {self.max_batch_size}")

    @property
    def normalized_log_level(self) -> str:
        """Return normalized uppercase log level."""
        return self.log_level.upper()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def get_config(argv: list[str] | None = None) -> Config:
    """Parse command line arguments and return configuration.

    Every flag defaults to its BLSCERT_* environment variable, so the same
    settings can come from a container environment or the command line.

    Raises:
        ValueError: If any setting is invalid

    """
    parser = argparse.ArgumentParser(
        prog="blscert",
        description="blscert - BLS12-381 min_pk signature verification service",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--host", default=os.getenv("BLSCERT_HOST", "127.0.0.1"), help="HTTP server host")
    parser.add_argument(
        "-p", "--port", default=os.getenv("BLSCERT_PORT", "8080"), help="HTTP server port"
    )
    parser.add_argument(
        "--workers", default=os.getenv("BLSCERT_WORKERS", "1"), help="Number of server worker processes"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default=os.getenv("BLSCERT_LOG_LEVEL", "INFO").upper(),
        help="Logging level",
    )
    parser.add_argument(
        "--metrics-enabled",
        action=argparse.BooleanOptionalAction,
        default=_env_flag("BLSCERT_METRICS_ENABLED"),
        help="Enable Prometheus metrics endpoint",
    )
    parser.add_argument(
        "--metrics-host", default=os.getenv("BLSCERT_METRICS_HOST", "127.0.0.1"), help="Host for metrics server"
    )
    parser.add_argument(
        "--metrics-port", default=os.getenv("BLSCERT_METRICS_PORT", "8081"), help="Port for metrics server"
    )
    parser.add_argument(
        "--max-batch-size",
        default=os.getenv("BLSCERT_MAX_BATCH_SIZE", "1024"),
        help="Maximum number of signatures or public keys per request",
    )

    args = parser.parse_args(argv)

    # Numeric values arrive as strings from both argv and the environment
    config_dict: dict[str, object] = {
        "host": args.host,
        "port": args.port,
        "workers": args.workers,
        "log_level": args.log_level,
        "metrics_enabled": args.metrics_enabled,
        "metrics_host": args.metrics_host,
        "metrics_port": args.metrics_port,
        "max_batch_size": args.max_batch_size,
    }

    try:
        config = msgspec.convert(config_dict, Config, strict=False)
    except msgspec.ValidationError as e:
        raise ValueError(f"Configuration validation error: {e}") from e

    return config
