import gzip
import os
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

import pytest

from prismagen.binaries import (
    ENGINES,
    PRISMA_CLI_VERSION,
    DownloadError,
    Engine,
    download,
    download_cli,
    fetch_native,
    global_cache_dir,
    prisma_cli_name,
)
from prismagen.platform import check_for_extension, name

PAYLOAD = b"#!/bin/sh\necho binary\n"


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/tool.gz":
            body = gzip.compress(PAYLOAD)
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        else:
            self.send_response(404)
            self.send_header("Content-Length", "0")
            self.end_headers()

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_port}"
    httpd.shutdown()
    httpd.server_close()


def test_engines_listed_in_order():
    assert [e.name for e in ENGINES] == [
        "query-engine",
        "migration-engine",
        "introspection-engine",
        "prisma-fmt",
    ]
    assert ENGINES[0] == Engine(name="query-engine", env="PRISMA_QUERY_ENGINE_BINARY")
    assert ENGINES[3].env == "PRISMA_FMT_BINARY"


def test_prisma_cli_name_contains_platform():
    cli = prisma_cli_name()
    assert cli.startswith("prisma-cli-")
    assert cli.endswith(name())


def test_global_cache_dir_layout():
    path = global_cache_dir()
    assert path.parts[-4:] == ("prisma", "binaries", "cli", PRISMA_CLI_VERSION)
    assert path.is_absolute()


def test_fetch_native_requires_absolute_path():
    with pytest.raises(ValueError, match="absolute"):
        fetch_native("relative/dir")


def test_download_cli_keeps_existing_file(tmp_path):
    target = Path(check_for_extension(name(), str(tmp_path / prisma_cli_name())))
    target.write_bytes(b"existing")
    download_cli(tmp_path)
    assert target.read_bytes() == b"existing"


def test_download_decompresses_and_stores(server, tmp_path):
    target = tmp_path / "nested" / "tool"
    download(f"{server}/tool.gz", str(target))
    assert target.read_bytes() == PAYLOAD
    assert Path(f"{target}.tmp").read_bytes() == PAYLOAD
    assert os.name == "nt" or os.access(target, os.X_OK)


def test_download_reports_http_error(server, tmp_path):
    target = tmp_path / "missing"
    with pytest.raises(DownloadError, match="404"):
        download(f"{server}/missing.gz", str(target))
    assert not target.exists()