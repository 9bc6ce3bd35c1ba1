from .config import IngestConfig, load_ingest_config, resolve_ingest_policy

__all__ = [
    "IngestConfig",
    "load_ingest_config",
    "resolve_ingest_policy",
]
