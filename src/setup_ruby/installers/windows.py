"""RubyInstaller builds and native toolchains on Windows runners."""
import shutil
import tempfile
from pathlib import Path, PureWindowsPath
from typing import Optional, TextIO

from setup_ruby.commands import run_command
from setup_ruby.environment.accumulator import EnvironmentAccumulator
from setup_ruby.environment.differ import diff_initializer_environment
from setup_ruby.errors import SetupRubyError
from setup_ruby.installers.catalogs import WINDOWS_VERSIONS
from setup_ruby.installers.download import download_file
from setup_ruby.logging import get_logger, measure
from setup_ruby.types import InstallResult

logger = get_logger(__name__)

# Used by Ruby 2.2, 2.3 and mswin builds; shipped with Git for Windows
CERT_FILE = r"C:\Program Files\Git\mingw64\ssl\cert.pem"

# Hard-coded by MSVC OpenSSL builds
SSL_DIR = r"C:\Program Files\Common Files\SSL"

DEVKIT_URL = "https://dl.bintray.com/oneclick/rubyinstaller/DevKit-mingw64-64-4.7.2-20130224-1432-sfx.exe"

VCVARS = r'"C:\Program Files (x86)\Microsoft Visual Studio\2019\Enterprise\VC\Auxiliary\Build\vcvars64.bat"'

OLD_DEVKIT_RUBIES = ("2.2", "2.3")


def extraction_drive(accumulator: EnvironmentAccumulator) -> str:
    """Drive of the job workspace, the runner's SSD."""
    return (accumulator.environ.get("GITHUB_WORKSPACE") or "C")[0]


def msys_dir(drive: str) -> str:
    return f"{drive}:\\DevKit64"


def msys_path_entries(drive: str) -> list[str]:
    msys = msys_dir(drive)
    return [f"{msys}\\mingw\\x86_64-w64-mingw32\\bin", f"{msys}\\mingw\\bin", f"{msys}\\bin"]


def get_available_versions(platform: str, engine: str) -> Optional[list[str]]:
    if engine == "ruby":
        return list(WINDOWS_VERSIONS)
    return None


def archive_base(url: str) -> str:
    """Top-level directory of a RubyInstaller archive."""
    if not url.endswith(".7z"):
        raise SetupRubyError(f"URL should end in .7z: {url}", details={"url": url})
    return url[url.rindex("/") + 1:-len(".7z")]


async def install(
    platform: str,
    engine: str,
    version: str,
    accumulator: EnvironmentAccumulator,
    stream: Optional[TextIO] = None,
) -> InstallResult:
    """Extract a RubyInstaller archive to the workspace drive and set up its toolchain."""
    url = WINDOWS_VERSIONS[version]
    base = archive_base(url)
    drive = extraction_drive(accumulator)

    with tempfile.TemporaryDirectory() as tmpdir:
        archive = Path(tmpdir) / Path(url).name
        async with measure("Downloading Ruby", stream):
            logger.info({"event": "downloading_ruby", "url": url})
            await download_file(url, archive)
        async with measure("Extracting Ruby", stream):
            await run_command(
                ["7z", "x", str(archive), f"-xr!{base}\\share\\doc", f"-o{drive}:\\"]
            )

    prefix = f"{drive}:\\{base}"

    if version == "mswin":
        toolchain_paths = await setup_mswin(accumulator, stream)
    else:
        toolchain_paths = await setup_mingw(version, accumulator, stream)

    return prefix, [f"{prefix}\\bin", *toolchain_paths]


async def setup_mingw(
    version: str, accumulator: EnvironmentAccumulator, stream: Optional[TextIO] = None
) -> list[str]:
    accumulator.add_assignment("MAKE", "make.exe")

    if version.startswith(OLD_DEVKIT_RUBIES):
        accumulator.add_assignment("SSL_CERT_FILE", CERT_FILE)
        async with measure("Installing MSYS1", stream):
            await install_msys(version, accumulator)
        return msys_path_entries(extraction_drive(accumulator))

    return []


async def install_msys(version: str, accumulator: EnvironmentAccumulator) -> None:
    """Old RubyInstaller DevKit for Ruby 2.2 and 2.3."""
    msys = msys_dir(extraction_drive(accumulator))
    with tempfile.TemporaryDirectory() as tmpdir:
        installer = Path(tmpdir) / Path(DEVKIT_URL).name
        await download_file(DEVKIT_URL, installer)
        await run_command(["7z", "x", str(installer), f"-o{msys}"])

    # Normally set by the DevKit's devkit.rb
    accumulator.add_assignment("RI_DEVKIT", msys)
    accumulator.add_assignment("CC", "gcc")
    accumulator.add_assignment("CXX", "g++")
    accumulator.add_assignment("CPP", "cpp")
    logger.info({"event": "devkit_installed", "version": version, "path": msys})


def ensure_openssl_certs() -> None:
    """Put a cert bundle where MSVC OpenSSL builds look for it."""
    certs_dir = Path(PureWindowsPath(SSL_DIR) / "certs")
    certs_dir.mkdir(parents=True, exist_ok=True)

    cert = Path(PureWindowsPath(SSL_DIR) / "cert.pem")
    if not cert.exists():
        shutil.copyfile(CERT_FILE, cert)


async def setup_mswin(
    accumulator: EnvironmentAccumulator, stream: Optional[TextIO] = None
) -> list[str]:
    accumulator.add_assignment("MAKE", "nmake.exe")
    ensure_openssl_certs()

    async with measure("Setting up MSVC environment", stream):
        return await add_vcvars_env(accumulator)


async def add_vcvars_env(accumulator: EnvironmentAccumulator) -> list[str]:
    """Record the MSVC environment so later steps need not run vcvars.

    Also records a VCVARS convenience variable. Assumes a single Visual
    Studio install on the runner image.
    """
    accumulator.add_assignment("VCVARS", VCVARS)
    return await diff_initializer_environment(accumulator, VCVARS, system="Windows")
