"""
myip Application Package

Directory Structure:
├── routers/           # FastAPI route handlers (address, health)
├── schemas/           # Pydantic models for API responses
├── application/       # FetchService: counting, cache and lookup orchestration
├── services/cache/    # Freshness policy, cache store and key-value backends
├── infrastructure/    # RDAP client
├── domain/            # Entities, errors and ports
├── templates/         # HTML page
├── logging_config.py  # Console, syslog and GELF logging
└── config.py          # Application configuration

Registry records are cached per address for 7 days and refreshed once they
are older than 24 hours; a stale record is still served when the refresh fails.
"""
