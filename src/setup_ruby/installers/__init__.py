"""Ruby installation backends.

Each backend lists the versions it can install on a platform and installs
one of them, returning the install prefix and the PATH entries to add."""
from setup_ruby.installers import ruby_builder, windows
from setup_ruby.logging import get_logger
from setup_ruby.platforms import WINDOWS
from setup_ruby.types import Installer, InstallerKind

logger = get_logger(__name__)

INSTALLERS: dict[InstallerKind, Installer] = {
    InstallerKind.RUBY_BUILDER: Installer(
        kind=InstallerKind.RUBY_BUILDER,
        get_available_versions=ruby_builder.get_available_versions,
        install=ruby_builder.install,
    ),
    InstallerKind.WINDOWS: Installer(
        kind=InstallerKind.WINDOWS,
        get_available_versions=windows.get_available_versions,
        install=windows.install,
    ),
}


def select_installer(platform: str, engine: str) -> Installer:
    """RubyInstaller for CRuby on Windows, ruby-builder everywhere else."""
    if platform == WINDOWS and engine != "jruby":
        kind = InstallerKind.WINDOWS
    else:
        kind = InstallerKind.RUBY_BUILDER

    logger.debug({"event": "installer_selected", "platform": platform, "engine": engine, "installer": kind.name})
    return INSTALLERS[kind]


__all__ = ["INSTALLERS", "select_installer"]
