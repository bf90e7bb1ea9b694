"""Ruby version specifiers, version files and catalog resolution."""
from setup_ruby.versions.resolver import resolve_version
from setup_ruby.versions.specifier import parse_specifier, split_specifier

__all__ = ["parse_specifier", "resolve_version", "split_specifier"]
