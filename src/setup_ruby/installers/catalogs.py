"""Static version catalogs, oldest to newest."""

RUBY_BUILDER_VERSIONS: dict[str, list[str]] = {
    "ruby": [
        "2.1.9",
        "2.2.10",
        "2.3.0", "2.3.1", "2.3.2", "2.3.3", "2.3.4", "2.3.5", "2.3.6", "2.3.7", "2.3.8",
        "2.4.0", "2.4.1", "2.4.2", "2.4.3", "2.4.4", "2.4.5", "2.4.6", "2.4.7", "2.4.9", "2.4.10",
        "2.5.0", "2.5.1", "2.5.2", "2.5.3", "2.5.4", "2.5.5", "2.5.6", "2.5.7", "2.5.8",
        "2.6.0", "2.6.1", "2.6.2", "2.6.3", "2.6.4", "2.6.5", "2.6.6",
        "2.7.0", "2.7.1", "2.7.2",
        "head",
    ],
    "jruby": [
        "9.1.17.0",
        "9.2.9.0", "9.2.10.0", "9.2.11.0", "9.2.11.1", "9.2.12.0", "9.2.13.0",
        "head",
    ],
    "truffleruby": [
        "19.3.0", "19.3.1",
        "20.0.0", "20.1.0", "20.2.0",
        "head",
    ],
    "rubinius": [
        "4.18", "4.19", "4.20",
    ],
}

# The debug build is only published for Ubuntu runners
UBUNTU_ONLY_VERSIONS: dict[str, list[str]] = {
    "ruby": ["debug"],
}

RUBYINSTALLER2_URL = "https://github.com/oneclick/rubyinstaller2/releases/download"
RUBYINSTALLER1_URL = "https://github.com/oneclick/rubyinstaller/releases/download"
RUBY_LOCO_URL = "https://github.com/MSP-Greg/ruby-loco/releases/download/ruby-master"


def _ri2(version: str, build: int = 1) -> str:
    return f"{RUBYINSTALLER2_URL}/RubyInstaller-{version}-{build}/rubyinstaller-{version}-{build}-x64.7z"


WINDOWS_VERSIONS: dict[str, str] = {
    "2.2.6": f"{RUBYINSTALLER1_URL}/ruby-2.2.6/ruby-2.2.6-x64-mingw32.7z",
    "2.3.3": f"{RUBYINSTALLER1_URL}/ruby-2.3.3/ruby-2.3.3-x64-mingw32.7z",
    "2.4.1": _ri2("2.4.1", 2),
    "2.4.2": _ri2("2.4.2", 2),
    "2.4.3": _ri2("2.4.3", 2),
    "2.4.4": _ri2("2.4.4", 2),
    "2.4.5": _ri2("2.4.5"),
    "2.4.6": _ri2("2.4.6"),
    "2.4.7": _ri2("2.4.7"),
    "2.4.9": _ri2("2.4.9"),
    "2.4.10": _ri2("2.4.10"),
    "2.5.0": _ri2("2.5.0", 2),
    "2.5.1": _ri2("2.5.1", 2),
    "2.5.3": _ri2("2.5.3"),
    "2.5.5": _ri2("2.5.5"),
    "2.5.6": _ri2("2.5.6"),
    "2.5.7": _ri2("2.5.7"),
    "2.5.8": _ri2("2.5.8"),
    "2.6.0": _ri2("2.6.0"),
    "2.6.1": _ri2("2.6.1"),
    "2.6.2": _ri2("2.6.2"),
    "2.6.3": _ri2("2.6.3"),
    "2.6.4": _ri2("2.6.4"),
    "2.6.5": _ri2("2.6.5"),
    "2.6.6": _ri2("2.6.6"),
    "2.7.0": _ri2("2.7.0"),
    "2.7.1": _ri2("2.7.1"),
    "2.7.2": _ri2("2.7.2"),
    "head": f"{RUBYINSTALLER2_URL}/rubyinstaller-head/rubyinstaller-head-x64.7z",
    "mingw": f"{RUBY_LOCO_URL}/ruby-mingw.7z",
    "mswin": f"{RUBY_LOCO_URL}/ruby-mswin.7z",
}
