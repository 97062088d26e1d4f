"""Detection of the host platform used to pick prebuilt binaries."""

from __future__ import annotations

import platform as _platform
import re
import subprocess
from pathlib import Path

_OS_RELEASE = Path("/etc/os-release")
_ID = re.compile(r'^ID="?([^"\n]*)"?', re.MULTILINE)
_ID_LIKE = re.compile(r'^ID_LIKE="?([^"\n]*)"?', re.MULTILINE)
_OPENSSL = re.compile(r"^OpenSSL\s(\d+\.\d+)\.\d")


def name() -> str:
    """Return the operating system name, with macOS reported as ``darwin``."""
    system = _platform.system().lower()
    if system in ("darwin", "macos"):
        return "darwin"
    return system


def binary_platform_name() -> str:
    """Return the platform name used in engine binary download paths."""
    platform_name = name()
    if platform_name != "linux":
        return platform_name

    distro = get_linux_distro()
    if distro == "alpine":
        return "linux-musl"

    return f"{distro}-openssl-{get_openssl()}"


def get_linux_distro() -> str:
    """Detect the Linux distribution family from ``/etc/os-release``."""
    try:
        output = _OS_RELEASE.read_text(errors="replace")
    except OSError:
        output = ""
    return parse_linux_distro(output)


def parse_linux_distro(output: str) -> str:
    """Map the contents of an os-release file to a distribution family."""
    id_match = _ID.search(output)
    id_like_match = _ID_LIKE.search(output)

    if id_match is not None:
        distro_id = id_match.group(1)
        if distro_id == "alpine":
            return "alpine"

        if id_like_match is not None:
            id_like = id_like_match.group(1)
            if (
                "centos" in id_like
                or "fedora" in id_like
                or "rhel" in id_like
                or distro_id == "fedora"
            ):
                return "alpine"

            if "debian" in id_like or "ubuntu" in id_like or distro_id == "debian":
                return "debian"

    return "debian"


def check_for_extension(platform: str, path: str) -> str:
    """Add the Windows executable extension to ``path`` when needed."""
    if platform == "windows":
        if ".gz" in path:
            return path.replace(".gz", ".exe.gz")
        return path + ".exe"
    return path


def get_openssl() -> str:
    """Return the installed OpenSSL series, such as ``1.1.x``."""
    completed = subprocess.run(
        ["openssl", "version", "-v"],
        capture_output=True,
        text=True,
        check=False,
    )
    return parse_openssl_version(completed.stdout + completed.stderr)


def parse_openssl_version(text: str) -> str:
    """Extract the ``major.minor.x`` series from ``openssl version`` output."""
    match = _OPENSSL.match(text)
    if match is None:
        raise ValueError(f"unrecognised OpenSSL version output: {text!r}")
    return match.group(1) + ".x"