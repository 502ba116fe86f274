"""Make a repository available on local disk for history extraction."""

from __future__ import annotations

import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
from urllib.parse import urlsplit, urlunsplit

from ..exceptions import CloneError
from ..logging_config import get_logger
from .git_extractor import run_git

logger = get_logger(__name__)


def with_token(url: str, auth_token: Optional[str]) -> str:
    """Embed ``auth_token`` as basic-auth credentials in an http(s) URL."""
    if not auth_token:
        return url
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return url
    host = parts.netloc.rsplit("@", 1)[-1]
    return urlunsplit(parts._replace(netloc=f"token:{auth_token}@{host}"))


def redact(url: str) -> str:
    """Strip credentials from a URL before it reaches logs or errors."""
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[-1]
    return urlunsplit(parts._replace(netloc=host))


def is_local(repo: str) -> bool:
    return "://" not in repo and Path(repo).expanduser().is_dir()


@contextmanager
def checkout(
    repo: str,
    auth_token: Optional[str] = None,
    temp_dir: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Iterator[str]:
    """Yield a local path holding the full history of ``repo``.

    Local directories are used in place. Anything else is cloned (all
    history, no working tree) into a fresh temporary directory that is
    removed on exit.
    """
    if is_local(repo):
        yield str(Path(repo).expanduser().resolve())
        return

    if temp_dir is not None:
        Path(temp_dir).mkdir(parents=True, exist_ok=True)
    workdir = tempfile.mkdtemp(prefix="firesight-", dir=temp_dir)
    dest = str(Path(workdir) / "repo")
    safe_url = redact(repo)

    try:
        logger.info("Cloning %s", safe_url)
        result = run_git(
            ["clone", "--quiet", "--no-checkout", with_token(repo, auth_token), dest],
            timeout=timeout,
        )
        if result.returncode != 0:
            reason = result.stderr.strip()
            if auth_token:
                reason = reason.replace(auth_token, "***")
            raise CloneError(safe_url, reason)
        yield dest
    finally:
        shutil.rmtree(workdir, ignore_errors=True)
        logger.debug("Removed %s", workdir)
