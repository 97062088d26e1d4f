"""Locating and downloading the prebuilt CLI and engine binaries."""

from __future__ import annotations

import gzip
import os
import shutil
import stat
import zlib
from dataclasses import dataclass
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from platformdirs import user_cache_dir

from . import platform

PRISMA_CLI_VERSION = "3.10.0"
ENGINE_VERSION = "73e60b76d394f8d37d8ebd1f8918c79029f0db86"
BASE_DIR_NAME = "prisma/binaries"

_CLI_URL = "https://prisma-photongo.s3-eu-west-1.amazonaws.com/{name}-{version}-{platform}.gz"
_ENGINE_URL = "https://binaries.prisma.sh/all_commits/{version}/{platform}/{engine}.gz"


class DownloadError(RuntimeError):
    """Raised when a binary cannot be fetched or stored."""


@dataclass(frozen=True)
class Engine:
    """A query engine binary and the environment variable that overrides it."""

    name: str
    env: str


ENGINES = (
    Engine(name="query-engine", env="PRISMA_QUERY_ENGINE_BINARY"),
    Engine(name="migration-engine", env="PRISMA_MIGRATION_ENGINE_BINARY"),
    Engine(name="introspection-engine", env="PRISMA_INTROSPECTION_ENGINE_BINARY"),
    Engine(name="prisma-fmt", env="PRISMA_FMT_BINARY"),
)


def prisma_cli_name() -> str:
    """Return the file name of the CLI binary for this platform."""
    return f"prisma-cli-{platform.name()}"


def global_cache_dir() -> Path:
    """Return the per-user cache directory holding the CLI binaries."""
    return Path(user_cache_dir()) / BASE_DIR_NAME / "cli" / PRISMA_CLI_VERSION


def fetch_native(to_dir: str | os.PathLike[str]) -> None:
    """Download the CLI and every engine into ``to_dir`` if missing."""
    to_dir = Path(to_dir)
    if not to_dir.is_absolute():
        raise ValueError("to_dir must be absolute")

    download_cli(to_dir)
    for engine in ENGINES:
        download_engine(engine.name, to_dir)


def download_cli(to_dir: str | os.PathLike[str]) -> None:
    """Download the CLI binary into ``to_dir`` unless it is already present."""
    platform_name = platform.name()
    to = platform.check_for_extension(platform_name, str(Path(to_dir) / prisma_cli_name()))
    url = platform.check_for_extension(
        platform_name,
        _CLI_URL.format(name="prisma-cli", version=PRISMA_CLI_VERSION, platform=platform_name),
    )

    if os.path.exists(to):
        return

    download(url, to)


def download_engine(engine_name: str, to_dir: str | os.PathLike[str]) -> None:
    """Download one engine binary into ``to_dir`` unless it is already present."""
    os_name = platform.binary_platform_name()
    to = platform.check_for_extension(
        os_name,
        str(Path(to_dir) / ENGINE_VERSION / f"prisma-{engine_name}-{os_name}"),
    )
    url = platform.check_for_extension(
        os_name,
        _ENGINE_URL.format(version=ENGINE_VERSION, platform=os_name, engine=engine_name),
    )

    if os.path.exists(to):
        return

    print(f"Downloading {url} to {to}")
    download(url, to)


def download(url: str, to: str | os.PathLike[str]) -> None:
    """Fetch a gzip-compressed binary from ``url`` and store it, executable, at ``to``."""
    target = Path(to)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = Path(f"{target}.tmp")

    try:
        with urlopen(url) as response:
            status = getattr(response, "status", None)
            if status is not None and status != 200:
                raise DownloadError(f"received code {status} from {url}")
            with gzip.GzipFile(fileobj=response) as decompressed:
                data = decompressed.read()
    except HTTPError as exc:
        raise DownloadError(f"received code {exc.code} from {url}") from exc
    except URLError as exc:
        raise DownloadError(f"could not download {url} to {target}: {exc.reason}") from exc
    except (OSError, EOFError, zlib.error) as exc:
        raise DownloadError(f"could not download {url} to {target}: {exc}") from exc

    try:
        tmp.write_bytes(data)
        if os.name != "nt":
            mode = tmp.stat().st_mode
            tmp.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        shutil.copy(tmp, target)
    except OSError as exc:
        raise DownloadError(f"could not copy file {url}: {exc}") from exc