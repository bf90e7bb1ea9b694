"""Tests for Bundler version selection and installation."""
from unittest.mock import AsyncMock, patch

import pytest

from setup_ruby.bundler import install_bundler, select_bundler_version, shipped_bundler_reason
from setup_ruby.errors import InputResolutionError


def write_lockfile(path, version):
    (path / "Gemfile.lock").write_text(f"GEM\n  specs:\n\nBUNDLED WITH\n   {version}\n")


@pytest.mark.parametrize("bundler_input", ["default", "Gemfile.lock"])
def test_select_from_lockfile(tmp_path, bundler_input):
    """Test the lockfile decides when present"""
    write_lockfile(tmp_path, "1.17.3")
    assert select_bundler_version(bundler_input, "2.7.2", tmp_path) == "1"


def test_select_latest(tmp_path):
    """Test default without a lockfile and latest both mean Bundler 2"""
    assert select_bundler_version("default", "2.7.2", tmp_path) == "2"
    assert select_bundler_version("latest", "2.7.2", tmp_path) == "2"
    assert select_bundler_version("1", "2.7.2", tmp_path) == "1"


@pytest.mark.parametrize("ruby_version", ["2.2.10", "2.3.8"])
def test_select_downgrades_old_rubies(tmp_path, ruby_version):
    """Test Ruby 2.2 and 2.3 get Bundler 1"""
    assert select_bundler_version("2", ruby_version, tmp_path) == "1"


def test_select_rejects_garbage(tmp_path):
    """Test unparseable input fails"""
    with pytest.raises(InputResolutionError, match="Cannot parse bundler input: newest"):
        select_bundler_version("newest", "2.7.2", tmp_path)


@pytest.mark.parametrize(
    "engine,ruby_version,bundler,skipped",
    [
        ("ruby", "head", "2", True),
        ("ruby", "head", "1", False),
        ("ruby", "2.7.2", "2", False),
        ("truffleruby", "20.2.0", "1", True),
        ("truffleruby", "20.2.0", "2", False),
        ("rubinius", "4.20", "2", True),
        ("jruby", "9.2.13.0", "2", False),
    ],
)
def test_shipped_bundler(engine, ruby_version, bundler, skipped):
    """Test when the Ruby's own Bundler is kept"""
    assert (shipped_bundler_reason(engine, ruby_version, bundler) is not None) == skipped


@pytest.mark.asyncio
async def test_install_bundler_runs_gem(tmp_path):
    """Test gem install is invoked from the new Ruby's prefix"""
    with patch("setup_ruby.bundler.run_command", new_callable=AsyncMock, return_value=("", "")) as run:
        version = await install_bundler("default", "/opt/rubies/ruby-2.7.2", "ruby", "2.7.2", tmp_path)

    assert version == "2"
    cmd = run.await_args.args[0]
    assert "ruby-2.7.2" in cmd
    assert 'install bundler -v "~> 2" --no-document' in cmd


@pytest.mark.asyncio
async def test_install_bundler_skips_shipped(tmp_path):
    """Test no command runs when the shipped Bundler is used"""
    with patch("setup_ruby.bundler.run_command", new_callable=AsyncMock) as run:
        await install_bundler("default", "/opt/rubies/rubinius-4.20", "rubinius", "4.20", tmp_path)
    run.assert_not_awaited()
