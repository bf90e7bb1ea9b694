"""Prebuilt Ruby tarballs from the ruby-builder releases."""
import tempfile
from pathlib import Path
from typing import Optional, TextIO

from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.installers.catalogs import RUBY_BUILDER_VERSIONS, UBUNTU_ONLY_VERSIONS
from setup_ruby.installers.download import download_file, extract_tarball
from setup_ruby.logging import get_logger, measure
from setup_ruby.platforms import home_dir
from setup_ruby.types import InstallResult, is_head_version

logger = get_logger(__name__)

RELEASES_URL = "https://github.com/ruby/ruby-builder/releases"
BUILDER_RELEASE_TAG = "enable-shared"


def rubies_dir() -> Path:
    return home_dir() / ".rubies"


def get_available_versions(platform: str, engine: str) -> Optional[list[str]]:
    versions = RUBY_BUILDER_VERSIONS.get(engine)
    if versions is None:
        return None
    if platform.startswith("ubuntu-"):
        return versions + UBUNTU_ONLY_VERSIONS.get(engine, [])
    return list(versions)


def get_download_url(platform: str, engine: str, version: str) -> str:
    """Release asset URL; head-like builds come from the nightly builders."""
    asset = f"{engine}-{version}-{platform}.tar.gz"
    if is_head_version(version):
        repo = "truffleruby-dev-builder" if engine == "truffleruby" else "ruby-dev-builder"
        return f"https://github.com/ruby/{repo}/releases/latest/download/{asset}"
    return f"{RELEASES_URL}/download/{BUILDER_RELEASE_TAG}/{asset}"


async def install(
    platform: str,
    engine: str,
    version: str,
    accumulator: EnvironmentAccumulator,
    stream: Optional[TextIO] = None,
) -> InstallResult:
    """Download and extract a prebuilt Ruby under ~/.rubies."""
    target = rubies_dir()
    url = get_download_url(platform, engine, version)

    with tempfile.TemporaryDirectory() as tmpdir:
        archive = Path(tmpdir) / Path(url).name
        async with measure("Downloading Ruby", stream):
            logger.info({"event": "downloading_ruby", "url": url})
            await download_file(url, archive)
        async with measure("Extracting Ruby", stream):
            extract_tarball(archive, target)

    prefix = target / f"{engine}-{version}"
    new_path_entries = [str(prefix / "bin")]
    if engine == "rubinius":
        new_path_entries.append(str(prefix / "gems" / "bin"))

    logger.info({"event": "ruby_installed", "prefix": str(prefix), "engine": engine, "version": version})
    return str(prefix), new_path_entries
