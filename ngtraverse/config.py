import os
from dataclasses import dataclass, field


def _env_int(name, default):
    value = os.environ.get(name, "").strip()
    return int(value) if value.isdigit() else default


def _env_float(name, default):
    value = os.environ.get(name, "").strip()
    try:
        return float(value) if value else default
    except ValueError:
        return default


# Deepest type/expression nesting the resolvers will descend into.
MAX_RESOLUTION_DEPTH = _env_int("NGTRAVERSE_MAX_DEPTH", 100)


def default_max_workers():
    return _env_int("NGTRAVERSE_MAX_WORKERS", min(32, (os.cpu_count() or 1) + 4))


@dataclass
class RunConfig:
    """Options for a batch run over a directory of TypeScript files."""

    max_workers: int = field(default_factory=default_max_workers)
    file_timeout: float = field(default_factory=lambda: _env_float("NGTRAVERSE_FILE_TIMEOUT", 30.0))
    include_specs: bool = False
    extensions: tuple = (".ts", ".tsx")
