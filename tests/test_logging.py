import io

import pytest

from setup_ruby.logging import (
    configure_logging,
    get_logger,
    measure,
    unpack_event_dict,
)


def test_unpack_event_dict():
    """Test dict events are flattened into the event dict"""
    event_dict = {"event": {"event": "path_cleaned", "removed": ["/ruby/bin"]}}
    result = unpack_event_dict(None, "info", event_dict)
    assert result == {"event": "path_cleaned", "removed": ["/ruby/bin"]}


def test_unpack_event_dict_plain_string():
    """Test string events pass through"""
    assert unpack_event_dict(None, "info", {"event": "hello"}) == {"event": "hello"}


def test_get_logger():
    """Test logger retrieval"""
    configure_logging("DEBUG")
    logger = get_logger("setup_ruby.test")
    assert hasattr(logger, "bind")
    logger.debug({"event": "logger_ready", "name": "setup_ruby.test"})


@pytest.mark.asyncio
async def test_measure_groups_output():
    """Test steps are wrapped in a runner log group"""
    stream = io.StringIO()
    async with measure("Installing Bundler", stream):
        stream.write("inside\n")

    lines = stream.getvalue().splitlines()
    assert lines[0] == "::group::Installing Bundler"
    assert lines[1] == "inside"
    assert lines[2].startswith("Took ")
    assert lines[-1] == "::endgroup::"


@pytest.mark.asyncio
async def test_measure_closes_group_on_error():
    """Test the group is closed when the step fails"""
    stream = io.StringIO()
    with pytest.raises(ValueError):
        async with measure("Extracting Ruby", stream):
            raise ValueError("boom")

    assert stream.getvalue().splitlines()[-1] == "::endgroup::"
