from pydantic_settings import BaseSettings
from pathlib import Path

# Directory of the myip package (templates live beside the code)
PACKAGE_DIR = Path(__file__).parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = False
    REQUEST_TIMEOUT: float = 3.0  # seconds per inbound request

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Store settings
    STORE_TYPE: str = "redis"  # "redis" or "memory"
    REDIS: str = "localhost:6379"
    REDIS_USER: str = ""
    REDIS_PASS: str = ""

    # RDAP settings; empty template disables registry lookups
    RDAP_API: str = ""
    RDAP_TIMEOUT: float = 5.0

    # Logging settings
    LOG_TYPE: str = "console"  # "console", "syslog", "system" or "gelf"
    LOG_ADDR: str = ""  # GELF host:port
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        str_strip_whitespace = True

settings = Settings()


def split_host_port(address: str, default_port: int) -> tuple[str, int]:
    """Split a ``host:port`` setting; bracketed IPv6 hosts are accepted."""
    address = address.strip()
    if not address:
        raise ValueError("address is empty")
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        port = rest.lstrip(":")
        return host, int(port) if port else default_port
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, default_port
    return host, int(port)
